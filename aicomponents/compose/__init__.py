"""Stream reassembly helpers shared by components."""
from aicomponents.compose.stream_concat import (
    StreamConcatRegistry,
    concat_stream_chunks,
    default_concat_registry,
    register_stream_chunk_concat_func,
)

__all__ = [
    "StreamConcatRegistry",
    "default_concat_registry",
    "register_stream_chunk_concat_func",
    "concat_stream_chunks",
]
