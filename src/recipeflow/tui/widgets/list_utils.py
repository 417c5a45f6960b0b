from __future__ import annotations

from textual.widgets import Label, ListItem, ListView


def highlighted_item(list_view: ListView) -> ListItem | None:
    item = getattr(list_view, "highlighted_child", None)
    if item is None:
        highlighted = getattr(list_view, "index", None)
        if isinstance(highlighted, int) and 0 <= highlighted < len(list_view.children):
            item = list_view.children[highlighted]
    return item


def highlighted_value(list_view: ListView, attr: str):
    item = highlighted_item(list_view)
    if item is None:
        return None
    return getattr(item, attr, None)


async def replace_items(list_view: ListView, items: list[ListItem], placeholder: str) -> None:
    await list_view.clear()
    if items:
        await list_view.extend(items)
    else:
        await list_view.append(ListItem(Label(placeholder)))
