"""
Stream-chunk concatenation registry: map value type -> merge function.

Components register merge functions for their own extra-value types during
an explicit registration call; the message reassembly code looks them up by
the type of the chunks it holds.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar

from aicomponents.core.exceptions import StreamConcatError

logger = logging.getLogger(__name__)

T = TypeVar("T")
ConcatFunc = Callable[[Sequence[Any]], Any]


def _concat_strings(chunks: Sequence[str]) -> str:
    return "".join(chunks)


class StreamConcatRegistry:
    """Maps a concrete chunk type to a function merging a list of such chunks."""

    def __init__(self) -> None:
        self._funcs: Dict[type, ConcatFunc] = {str: _concat_strings}

    def register(self, tp: Type[T], func: Callable[[Sequence[T]], T]) -> None:
        """Register (or replace) the merge function for chunks of exactly ``tp``."""
        if tp in self._funcs and self._funcs[tp] is not func:
            logger.debug("Replacing stream concat func for %s", tp.__name__)
        self._funcs[tp] = func

    def get(self, tp: type) -> Optional[ConcatFunc]:
        return self._funcs.get(tp)

    def is_registered(self, tp: type) -> bool:
        return tp in self._funcs

    def concat(self, chunks: Sequence[Any], tp: Optional[type] = None) -> Any:
        """Merge ``chunks`` in order.

        The merge function is chosen by ``tp`` or, when omitted, by the type of
        the first non-None chunk. A registered function always runs, so it
        decides what an empty or single-chunk stream means. Without one, a
        single chunk is returned as-is and several chunks raise
        StreamConcatError.
        """
        if tp is None:
            tp = next((type(c) for c in chunks if c is not None), None)
        if tp is None:
            return None

        func = self._funcs.get(tp)
        if func is not None:
            try:
                return func(chunks)
            except StreamConcatError:
                raise
            except Exception as exc:
                raise StreamConcatError(
                    f"Concat func for {tp.__name__} failed: {exc}",
                    details={"type": tp.__name__, "chunks": len(chunks)},
                    cause=exc,
                ) from exc

        present = [c for c in chunks if c is not None]
        if len(present) == 1:
            return present[0]
        raise StreamConcatError(
            f"No stream concat func registered for type {tp.__name__}",
            details={"type": tp.__name__, "chunks": len(chunks)},
        )


default_concat_registry = StreamConcatRegistry()


def register_stream_chunk_concat_func(
    tp: Type[T],
    func: Callable[[Sequence[T]], T],
    registry: Optional[StreamConcatRegistry] = None,
) -> None:
    (registry or default_concat_registry).register(tp, func)


def concat_stream_chunks(chunks: Sequence[Any], registry: Optional[StreamConcatRegistry] = None) -> Any:
    return (registry or default_concat_registry).concat(chunks)
