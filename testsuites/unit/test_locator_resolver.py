import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.element_reference import ElementReference
from testsuites.ui_testing.framework.exceptions import (
    InteractionError,
    InvalidReferenceError,
    LocatorNotFoundError,
    ResolutionTimeoutError,
)
from testsuites.ui_testing.framework.locator_catalog import LocatorCatalog
from testsuites.ui_testing.framework.locator_resolver import (
    FrameScope,
    LocatorResolver,
    PageContext,
)
from testsuites.unit.fakes import FakeElement, FakePage, SpyCatalog, playwright_error


PAGES = {
    "login": {"username_input": "input#username", "login_button": "div#submit"},
    "frames": {"payment_frame": "iframe#payment"},
}


def make_resolver(page: FakePage, default_timeout: int = 30000):
    catalog = SpyCatalog(PAGES)
    return LocatorResolver(catalog, PageContext(page), default_timeout), catalog


@pytest.mark.asyncio
async def test_resolve_waits_then_scrolls():
    page = FakePage({"input#username": FakeElement()})
    resolver, _ = make_resolver(page)

    locator = await resolver.resolve("login.username_input")

    assert locator.selector == "input#username"
    assert page.called("wait_for") == [("input#username", (), {"state": "visible", "timeout": 30000})]
    assert page.called("scroll_into_view_if_needed") == [("input#username", (), {"timeout": 2000})]


@pytest.mark.asyncio
async def test_resolve_accepts_parsed_reference_and_timeout():
    page = FakePage({"div#submit": FakeElement()})
    resolver, _ = make_resolver(page, default_timeout=1000)

    await resolver.resolve(ElementReference("login", "login_button"), timeout=250)

    assert page.called("wait_for")[0][2]["timeout"] == 250


@pytest.mark.asyncio
@pytest.mark.parametrize("reference", ["loginusername_input", "login.a.b", "", ".username_input"])
async def test_malformed_reference_never_reaches_catalog_or_page(reference):
    page = FakePage({"input#username": FakeElement()})
    resolver, catalog = make_resolver(page)

    with pytest.raises(InvalidReferenceError):
        await resolver.resolve(reference)

    assert catalog.lookups == []
    assert page.calls == []


@pytest.mark.asyncio
async def test_undeclared_element_names_element_and_page():
    page = FakePage()
    resolver, catalog = make_resolver(page)

    with pytest.raises(LocatorNotFoundError) as exc:
        await resolver.resolve("login.remember_me")

    assert str(exc.value) == "Locator not found for element: remember_me in page: login"
    assert catalog.lookups == [("login", "remember_me")]
    assert page.calls == []


@pytest.mark.asyncio
async def test_timeout_is_translated_and_chained():
    page = FakePage({"input#username": FakeElement(visible=False)})
    resolver, _ = make_resolver(page)

    with pytest.raises(ResolutionTimeoutError) as exc:
        await resolver.resolve("login.username_input", timeout=500)

    error = exc.value
    assert error.page_name == "login"
    assert error.element_name == "username_input"
    assert error.state == "visible"
    assert error.timeout == 500
    assert "username_input" in str(error) and "login" in str(error)
    assert isinstance(error.__cause__, PlaywrightTimeoutError)
    assert page.called("scroll_into_view_if_needed") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("state", ["hidden", "detached"])
async def test_non_visible_states_do_not_scroll(state):
    page = FakePage()
    resolver, _ = make_resolver(page)

    await resolver.resolve("login.username_input", state=state)

    assert page.called("wait_for")[0][2]["state"] == state
    assert page.called("scroll_into_view_if_needed") == []


@pytest.mark.asyncio
async def test_unknown_state_rejected_before_lookup():
    page = FakePage()
    resolver, catalog = make_resolver(page)

    with pytest.raises(ValueError, match="Unknown element state"):
        await resolver.resolve("login.username_input", state="enabled")

    assert catalog.lookups == []


@pytest.mark.asyncio
async def test_scroll_failure_does_not_fail_resolution():
    page = FakePage({
        "input#username": FakeElement(errors={"scroll_into_view_if_needed": playwright_error("detached")}),
    })
    resolver, _ = make_resolver(page)

    locator = await resolver.resolve("login.username_input")

    assert locator.selector == "input#username"


@pytest.mark.asyncio
async def test_switching_context_retargets_resolution():
    first = FakePage({"input#username": FakeElement()})
    second = FakePage({"input#username": FakeElement()}, context=first.context)
    resolver, _ = make_resolver(first)

    resolver.context.switch(second)
    await resolver.resolve("login.username_input")

    assert first.calls == []
    assert len(second.called("wait_for")) == 1


def test_locator_does_not_wait():
    page = FakePage()
    resolver, _ = make_resolver(page)

    locator = resolver.locator("login.login_button")

    assert locator.selector == "div#submit"
    assert page.calls == []


@pytest.mark.asyncio
async def test_frame_scope_resolves_inside_frame():
    page = FakePage({"iframe#payment >> input#username": FakeElement()})
    resolver, _ = make_resolver(page)
    scope = FrameScope(resolver, page.frame_locator("iframe#payment"), "iframe#payment")

    locator = await scope.resolve("login.username_input")

    assert locator.selector == "iframe#payment >> input#username"
    assert scope.locator("login.login_button").selector == "iframe#payment >> div#submit"


@pytest.mark.asyncio
async def test_catalog_from_definitions_end_to_end():
    catalog = LocatorCatalog.from_definitions({"login": {"username_input": {"locator": "input#user"}}})
    page = FakePage({"input#user": FakeElement()})
    resolver = LocatorResolver(catalog, PageContext(page))

    locator = await resolver.resolve("login.username_input")
    assert locator.selector == "input#user"

    with pytest.raises(LocatorNotFoundError) as exc:
        await resolver.resolve("login.nonexistent")
    assert "nonexistent" in str(exc.value) and "login" in str(exc.value)


@pytest.mark.asyncio
async def test_browser_error_during_wait_names_element_and_page():
    cause = playwright_error("strict mode violation: resolved to 3 elements")
    page = FakePage({"input#username": FakeElement(errors={"wait_for": cause})})
    resolver, _ = make_resolver(page)

    with pytest.raises(InteractionError) as exc:
        await resolver.resolve("login.username_input")

    assert str(exc.value).startswith("Failed to wait for element: username_input in page: login")
    assert "state visible: strict mode violation" in str(exc.value)
    assert exc.value.reference == "login.username_input"
    assert exc.value.__cause__ is cause
    assert page.called("scroll_into_view_if_needed") == []
