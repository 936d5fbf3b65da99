"""
Gallery index component - paginated id index maintenance.

Entry points wrap IndexManager so that callers hand over plain input
objects and get frozen outputs back. Store errors propagate unchanged.
"""

from __future__ import annotations

from ._impl import IndexManager
from .models import (
    AddToIndexInput,
    AddToIndexOutput,
    CompactIndexInput,
    CompactionReport,
    FetchPageInput,
    FetchPageOutput,
    RemovalReport,
    RemoveFromIndexInput,
)


def run_add(inp: AddToIndexInput, index: IndexManager) -> AddToIndexOutput:
    """
    Insert an id at the head of the index.

    Args:
        inp: Input carrying the id.
        index: Index manager.

    Returns:
        AddToIndexOutput with updated metadata.
    """
    meta, pages_written = index.add_to_index(inp.item_id)
    return AddToIndexOutput(meta=meta, pages_written=pages_written)


def run_remove(inp: RemoveFromIndexInput, index: IndexManager) -> RemovalReport:
    """Remove a batch of ids. Does not compact."""
    return index.remove_from_index(inp.item_ids)


def run_compact(inp: CompactIndexInput, index: IndexManager) -> CompactionReport:
    """Repack underfull pages."""
    return index.compact_index()


def run_fetch_page(inp: FetchPageInput, index: IndexManager) -> FetchPageOutput:
    """
    Read one presentation page.

    Args:
        inp: 1-based page number and presentation page size.
        index: Index manager.

    Returns:
        FetchPageOutput with the ids and pager totals.

    Raises:
        ValueError: If page_number or logical_page_size is below 1.
    """
    ids = index.fetch_logical_page(inp.page_number, inp.logical_page_size)
    return FetchPageOutput(
        page_number=inp.page_number,
        total_pages=index.total_logical_pages(inp.logical_page_size),
        item_ids=ids,
    )


def run(
    inp: AddToIndexInput | RemoveFromIndexInput | CompactIndexInput | FetchPageInput,
    index: IndexManager,
) -> AddToIndexOutput | RemovalReport | CompactionReport | FetchPageOutput:
    """
    Main entry point for the gallery index component.

    Dispatches to the appropriate handler based on input type.
    """
    if isinstance(inp, AddToIndexInput):
        return run_add(inp, index)
    elif isinstance(inp, RemoveFromIndexInput):
        return run_remove(inp, index)
    elif isinstance(inp, CompactIndexInput):
        return run_compact(inp, index)
    elif isinstance(inp, FetchPageInput):
        return run_fetch_page(inp, index)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
