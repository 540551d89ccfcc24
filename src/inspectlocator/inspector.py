from __future__ import annotations

import hashlib
import logging
from pathlib import Path
import sys
from typing import Callable, TextIO

from .context_block import context_root, render_context_block
from .locator_synthesis import synthesize_locators
from .locator_terms import extract_search_term
from .models import InspectionReport, UiNode, freeze_attributes
from .report import render_report
from .selection import find_best_match
from .settings import LOG_DIR, InspectorSettings, resolve_settings
from .snapshot_parser import parse_snapshot

SnapshotProvider = Callable[[], "str | bytes | None"]

DEFAULT_EXCEPTION_NAME = "NoSuchElementException"
LOGGER_NAME = "inspectlocator.inspector"


class ElementInspector:
    def __init__(
        self,
        settings: InspectorSettings | None = None,
        *,
        logger: logging.Logger | None = None,
        stream: TextIO | None = None,
        log_dir: Path | None = None,
    ) -> None:
        self.settings = settings or InspectorSettings()
        self.logger = logger or self._build_logger(log_dir or LOG_DIR, self.settings.log_to_file)
        self._stream = stream

    def set_enabled(self, enabled: bool) -> None:
        self.settings.enabled = bool(enabled)

    def is_enabled(self) -> bool:
        return self.settings.enabled

    def inspect(
        self,
        snapshot_provider: SnapshotProvider,
        locator: str | None,
        exception_name: str = DEFAULT_EXCEPTION_NAME,
    ) -> InspectionReport | None:
        if not self.settings.enabled:
            return None

        try:
            markup = snapshot_provider()
            if not markup:
                self.logger.debug("Inspection skipped: no snapshot available for %s", locator)
                return None

            root = parse_snapshot(markup)
            if root is None:
                self.logger.debug("Inspection skipped: snapshot could not be parsed for %s", locator)
                return None

            return build_report(root, locator or "", exception_name, self.settings.context_depth)
        except Exception:
            self.logger.exception("Inspection failed for locator %s", locator)
            return None

    def report_failure(
        self,
        snapshot_provider: SnapshotProvider,
        locator: str | None,
        exception: BaseException | str | None = None,
    ) -> InspectionReport | None:
        exception_name = _exception_name(exception)
        report = self.inspect(snapshot_provider, locator, exception_name=exception_name)
        if report is None:
            return None

        try:
            stream = self._stream or sys.stdout
            stream.write(render_report(report, color=self.settings.color))
            stream.write("\n")
            stream.flush()
        except Exception:
            self.logger.exception("Could not write inspection report for %s", locator)
        return report

    @staticmethod
    def _build_logger(log_dir: Path, log_to_file: bool = True) -> logging.Logger:
        # One logger per log target.
        if log_to_file:
            target = hashlib.sha1(str(log_dir.expanduser().resolve()).encode("utf-8")).hexdigest()[:12]
            logger = logging.getLogger(f"{LOGGER_NAME}.file_{target}")
        else:
            logger = logging.getLogger(f"{LOGGER_NAME}.stderr")
        if logger.handlers:
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        if log_to_file:
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_dir / "inspector.log", encoding="utf-8")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
                return logger
            except OSError:
                pass

        # Fallback to stderr logging if file logger is off or cannot be initialized.
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
        return logger


def build_report(
    root: UiNode,
    locator: str,
    exception_name: str = DEFAULT_EXCEPTION_NAME,
    context_depth: int = 4,
) -> InspectionReport:
    search_term = extract_search_term(locator)
    match = find_best_match(root, search_term)
    if match is None:
        return InspectionReport(
            locator=locator,
            search_term=search_term,
            status="no_match",
            exception_name=exception_name,
        )

    node = match.node
    context = context_root(node)
    return InspectionReport(
        locator=locator,
        search_term=search_term,
        status="matched",
        exception_name=exception_name,
        score=match.score,
        tag=node.tag,
        attributes=freeze_attributes(node),
        suggestions=tuple(synthesize_locators(node)),
        container_tag=context.tag,
        context_block=render_context_block(context, max_depth=context_depth),
    )


def _exception_name(exception: BaseException | str | None) -> str:
    if exception is None:
        return DEFAULT_EXCEPTION_NAME
    if isinstance(exception, str):
        return exception.strip() or DEFAULT_EXCEPTION_NAME
    return type(exception).__name__


_default_inspector: ElementInspector | None = None


def get_default_inspector() -> ElementInspector:
    global _default_inspector
    if _default_inspector is None:
        _default_inspector = ElementInspector(resolve_settings())
    return _default_inspector


def set_default_inspector(inspector: ElementInspector | None) -> None:
    global _default_inspector
    _default_inspector = inspector


def set_enabled(enabled: bool) -> None:
    get_default_inspector().set_enabled(enabled)


def is_enabled() -> bool:
    return get_default_inspector().is_enabled()


def inspect(
    snapshot_provider: SnapshotProvider,
    locator: str | None,
    exception_name: str = DEFAULT_EXCEPTION_NAME,
) -> InspectionReport | None:
    return get_default_inspector().inspect(snapshot_provider, locator, exception_name=exception_name)
