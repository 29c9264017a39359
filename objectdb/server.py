"""FastMCP server exposing object index queries as tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from objectdb.config import AppConfig
from objectdb.domain.exceptions import ObjectDbException
from objectdb.domain.services import ObjectIndexService
from objectdb.infrastructure.loaders.entry_loader import EntryFileLoader
from objectdb.infrastructure.storage.index_storage import IndexStorage
from objectdb.presentation.formatter import MarkdownFormatter

if TYPE_CHECKING:
    from fastmcp import FastMCP

logger = logging.getLogger(__name__)


def create_service(config: AppConfig) -> ObjectIndexService:
    """Build the index described by ``config`` and wrap it in a service."""
    storage = IndexStorage(EntryFileLoader(), Path(config.index.source), config.index.layout)
    index = storage.build()
    return ObjectIndexService(
        index,
        default_limit=config.search.default_limit,
        max_limit=config.search.max_limit,
    )


def create_server(config: AppConfig) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        config: Application configuration (YAML + env + CLI merged).
    """
    from fastmcp import FastMCP

    mcp = FastMCP("objectdb")

    service = create_service(config)
    formatter = MarkdownFormatter()

    @mcp.tool()
    def search(
        query: str,
        category: str | None = None,
        exact: bool = False,
        limit: int | None = None,
    ) -> str:
        """Search indexed objects by keyword prefix.

        Every word of the query must match. Without a category all
        categories are searched.

        Args:
            query: Keywords, e.g. 'rev q3'
            category: Category path to search in, e.g. '/reports/finance'
            exact: Match whole words instead of prefixes
            limit: Maximum results to return
        """
        try:
            results = service.search(query, category=category, limit=limit, exact=exact)
            return formatter.format_query(query) + formatter.format_search_results(results)
        except ObjectDbException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def browse(path: str) -> str:
        """List every object filed under a category or any of its sub-categories.

        Args:
            path: Category path, e.g. '/reports'
        """
        try:
            return formatter.format_search_results(service.browse(path))
        except ObjectDbException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def list_categories(parent: str | None = None) -> str:
        """List known category paths, optionally only those below ``parent``."""
        return formatter.format_categories(service.list_categories(parent))

    @mcp.tool()
    def get_words(prefix: str, category: str | None = None) -> str:
        """List indexed words starting with a prefix.

        Args:
            prefix: Word prefix, e.g. 'rev'
            category: Category path to restrict the lookup to
        """
        try:
            return formatter.format_words(service.get_words(prefix, category), prefix)
        except ObjectDbException as e:
            return formatter.format_error(e)

    @mcp.tool()
    def get_entry(path: str) -> str:
        """Get one object by its category path and name, e.g. '/reports/finance/q3_revenue'."""
        try:
            return formatter.format_entry(service.get_entry(path))
        except ObjectDbException as e:
            return formatter.format_error(e)

    return mcp
