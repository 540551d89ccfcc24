from __future__ import annotations

from typing import TYPE_CHECKING, Any

from appium.webdriver.common.appiumby import AppiumBy
from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.support import expected_conditions
from selenium.webdriver.support.ui import WebDriverWait

from .inspector import ElementInspector, SnapshotProvider, get_default_inspector
from .locator_synthesis import xpath_literal
from .locator_terms import describe_locator

if TYPE_CHECKING:
    from selenium.webdriver.remote.webelement import WebElement

DEFAULT_WAIT_TIMEOUT = 10.0


def page_source_provider(driver: Any) -> SnapshotProvider:
    def _snapshot() -> str | None:
        return driver.page_source

    return _snapshot


def find_element(
    driver: Any,
    by: str,
    value: str,
    *,
    inspector: ElementInspector | None = None,
) -> WebElement:
    try:
        return driver.find_element(by, value)
    except NoSuchElementException as exc:
        _resolve(inspector).report_failure(page_source_provider(driver), describe_locator(by, value), exc)
        raise


def find_elements(
    driver: Any,
    by: str,
    value: str,
    *,
    inspector: ElementInspector | None = None,
) -> list[WebElement]:
    elements = list(driver.find_elements(by, value))
    if not elements:
        _resolve(inspector).report_failure(
            page_source_provider(driver),
            describe_locator(by, value),
            NoSuchElementException.__name__,
        )
    return elements


def wait_and_find(
    driver: Any,
    by: str,
    value: str,
    *,
    timeout: float = DEFAULT_WAIT_TIMEOUT,
    poll_frequency: float = 0.5,
    inspector: ElementInspector | None = None,
) -> WebElement:
    try:
        wait = WebDriverWait(driver, timeout, poll_frequency=poll_frequency)
        return wait.until(expected_conditions.presence_of_element_located((by, value)))
    except TimeoutException:
        _resolve(inspector).report_failure(
            page_source_provider(driver),
            describe_locator(by, value),
            NoSuchElementException.__name__,
        )
        raise


def find_by_text(driver: Any, text: str, *, inspector: ElementInspector | None = None) -> WebElement:
    return find_element(driver, AppiumBy.XPATH, f"//*[@text={xpath_literal(text)}]", inspector=inspector)


def find_by_id(driver: Any, resource_id: str, *, inspector: ElementInspector | None = None) -> WebElement:
    return find_element(driver, AppiumBy.ID, resource_id, inspector=inspector)


def find_by_accessibility_id(driver: Any, description: str, *, inspector: ElementInspector | None = None) -> WebElement:
    return find_element(driver, AppiumBy.ACCESSIBILITY_ID, description, inspector=inspector)


def _resolve(inspector: ElementInspector | None) -> ElementInspector:
    return inspector or get_default_inspector()
