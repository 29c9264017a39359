"""Markdown formatter for index queries."""

from __future__ import annotations

from objectdb.domain.entities import IndexEntry
from objectdb.infrastructure.trie.radix import RadixObjectNode

DESCRIPTION_WIDTH = 100


def _short(text: str) -> str:
    if len(text) <= DESCRIPTION_WIDTH:
        return text
    return text[:DESCRIPTION_WIDTH] + "..."


class MarkdownFormatter:
    """Formats index data as Markdown for CLI output and MCP tool responses."""

    def format_error(self, exception: Exception) -> str:
        return f"**Error:** {exception}\n"

    def format_query(self, query: str) -> str:
        return f"**Search:** `{query}`\n\n"

    def format_search_results(self, results: list[IndexEntry]) -> str:
        if not results:
            return "Nothing found.\n"

        if len(results) == 1:
            return self.format_entry(results[0])

        if len(results) <= 5:
            return self._format_compact_results(results)

        return self._format_table_results(results)

    def format_entry(self, entry: IndexEntry) -> str:
        parts = [f"## {entry.name}\n"]
        if entry.description:
            parts.append(f"{entry.description}\n")
        if entry.keywords:
            parts.append("**Keywords:** " + ", ".join(f"`{k}`" for k in entry.keywords))
        if entry.categories:
            parts.append("**Categories:** " + ", ".join(f"`{c}`" for c in entry.categories))
        return "\n".join(parts) + "\n"

    def format_categories(self, categories: list[str]) -> str:
        if not categories:
            return "No categories.\n"
        return "\n".join(f"- `{c}`" for c in categories) + "\n"

    def format_words(self, words: list[str], prefix: str) -> str:
        if not words:
            return f"No words start with `{prefix}`.\n"
        return f"**Words starting with** `{prefix}`:\n\n" + "\n".join(f"- {w}" for w in words) + "\n"

    def format_trie(self, node: RadixObjectNode) -> str:
        """Indented dump of a trie: one line per node with its object count."""
        lines: list[str] = []
        base = len(node.prefix)
        for child in node.walk():
            if child is node:
                continue
            depth = len(child.prefix) - base - 1
            lines.append(f"{'  ' * depth}- `{child.character}` ({len(child.get_objects())})")
        return "\n".join(lines) + "\n" if lines else "Empty index.\n"

    def _format_compact_results(self, results: list[IndexEntry]) -> str:
        parts: list[str] = []
        for entry in results:
            parts.append(f"- **{entry.name}**")
            if entry.description:
                parts.append(f"  {_short(entry.description)}")
        return "\n".join(parts) + "\n"

    def _format_table_results(self, results: list[IndexEntry]) -> str:
        lines = [
            "| Name | Categories | Description |",
            "|---|---|---|",
        ]
        for entry in results:
            categories = ", ".join(entry.categories)
            description = _short(entry.description).replace("|", "\\|")
            lines.append(f"| {entry.name} | {categories} | {description} |")
        return "\n".join(lines) + "\n"
