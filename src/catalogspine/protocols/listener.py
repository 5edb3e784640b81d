"""Item listener protocol.

The listener receives every non-discarded item of a page, in document
order, together with the name of the catalog it came from.

Example:
    >>> from catalogspine.protocols.listener import ItemListener
    >>> hasattr(ItemListener, "on_new_item")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogspine.models.items import ClassifiedItem


@runtime_checkable
class ItemListener(Protocol):
    """Item listener protocol."""

    def on_new_item(self, catalog: str, item: ClassifiedItem) -> None:
        """Handle one classified item."""
        ...


class CollectingListener:
    """Listener that keeps every item it receives.

    Example:
        >>> from catalogspine.protocols.listener import CollectingListener
        >>> from catalogspine.models.items import TopUpItem, UrlMap
        >>> listener = CollectingListener()
        >>> listener.on_new_item("shop", TopUpItem(catalog="shop", urls=UrlMap()))
        >>> [item.kind for item in listener.items]
        ['topup']
    """

    def __init__(self) -> None:
        self.items: list[ClassifiedItem] = []

    def on_new_item(self, catalog: str, item: ClassifiedItem) -> None:
        self.items.append(item)
