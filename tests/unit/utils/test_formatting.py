"""Unit tests for console formatting helpers."""

from batl.utils.formatting import THEME, create_table


class TestCreateTable:
    """Tests for create_table."""

    def test_columns_and_styles(self) -> None:
        """The first column is styled as a name, the rest as text."""
        table = create_table("Links", "Link", "Repository")

        assert table.title == "Links"
        assert [column.header for column in table.columns] == ["Link", "Repository"]
        assert [column.style for column in table.columns] == ["name", "text"]
        assert table.columns[0].no_wrap

    def test_styles_come_from_theme(self) -> None:
        """Every style the table refers to is defined by the theme."""
        table = create_table("Links", "Link", "Repository")
        used = {table.header_style, table.border_style}
        used.update(column.style for column in table.columns)

        assert used <= set(THEME.styles)

    def test_message_styles_defined(self) -> None:
        """The print helpers' styles are defined by the theme."""
        for style in ("info", "success", "warning", "error"):
            assert style in THEME.styles
