"""Link, identity and entry classification."""

from catalogspine.classify.identity import resolve_entry_id
from catalogspine.classify.items import ItemClassifier, annotation_of
from catalogspine.classify.links import BookFormat, ClassifiedLink, LinkCategory, classify_link

__all__ = [
    "BookFormat",
    "ClassifiedLink",
    "ItemClassifier",
    "LinkCategory",
    "annotation_of",
    "classify_link",
    "resolve_entry_id",
]
