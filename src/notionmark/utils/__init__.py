from .chunk import MAX_CHILDREN_PER_REQUEST, chunk_children
from .text_split import split_string

__all__ = [
    "MAX_CHILDREN_PER_REQUEST",
    "chunk_children",
    "split_string",
]
