from playwright.async_api import Page, ElementHandle


async def _resolve_input(container: Page | ElementHandle, selector: str) -> ElementHandle:
    if not selector:
        if not isinstance(container, ElementHandle):
            raise TypeError(
                "If no selector is provided, the container must be an ElementHandle, not a Page."
            )
        return container

    element = await container.query_selector(selector)
    if not element:
        raise ValueError(f"Could not find element with selector {selector}")
    return element


async def change_text_input(
    container: Page | ElementHandle, selector: str, value: str
) -> None:
    """
    Sets the text of an input or textarea to `value`.

    With a selector the field is looked up inside `container`; with an empty
    selector `container` must be the field itself. A field that already holds
    `value` (LinkedIn pre-fills some answers from the profile) is left as is.
    """
    input_element = await _resolve_input(container, selector)
    if await input_element.input_value() != value:
        await input_element.fill(value)
