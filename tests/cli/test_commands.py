from argparse import Namespace

import pytest

from cli.categories import cmd_add, cmd_list, cmd_suggest
from cli.contributors import cmd_contributors
from cli.report import cmd_report
from cli.statements import (
    cmd_check,
    cmd_duplicates,
    read_statement_files,
    statement_labels,
)
from export.mapping_document import read_mapping_file
from ingestion import ingest_many
from processors.deduplication import deduplicate
from tests.helpers import build_statement, statement_row


@pytest.fixture
def statement_paths(tmp_path):
    """Two overlapping statement files on disk."""
    may = tmp_path / "may.csv"
    may.write_text(
        build_statement(
            [
                statement_row("2024/5/1", "1.000,00", name="ALEX ROWAN", title="Salary"),
                statement_row("2024/5/10", "-250,00", title="PRISMA KAMPPI"),
            ]
        ),
        encoding="utf-8",
    )
    june = tmp_path / "june.csv"
    june.write_text(
        build_statement(
            [
                statement_row("2024/5/10", "-250,00", title="PRISMA KAMPPI"),
                statement_row("2024/6/2", "600,00", name="Jordan Lee", title="Transfer"),
            ]
        ),
        encoding="utf-8",
    )
    return [str(may), str(june)]


class TestStatementCommands:
    """Tests for the statements command."""

    def test_check(self, statement_paths, test_config, capsys):
        cmd_check(Namespace(files=statement_paths), test_config)

        output = capsys.readouterr().out
        assert "File: may.csv" in output
        assert "Total transactions: 4" in output

    def test_duplicates(self, statement_paths, test_config, capsys):
        cmd_duplicates(Namespace(files=statement_paths), test_config)

        output = capsys.readouterr().out
        assert "PRISMA KAMPPI" in output
        assert "Total duplicate groups: 1" in output

    def test_missing_file_exits(self, tmp_path, test_config):
        with pytest.raises(SystemExit) as exc_info:
            cmd_check(Namespace(files=[str(tmp_path / "nope.csv")]), test_config)

        assert exc_info.value.code == 1

    def test_invalid_file_exits(self, tmp_path, test_config):
        path = tmp_path / "bad.csv"
        path.write_text("Booking date;Amount\n2024/5/1;1,00\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            cmd_check(Namespace(files=[str(path)]), test_config)


class TestStatementLabels:
    """Tests for labelling statement files that share a file name."""

    def test_unique_names_stay_short(self):
        assert statement_labels(["x/may.csv", "y/june.csv"]) == ["may.csv", "june.csv"]

    def test_clashing_names_use_given_path(self):
        assert statement_labels(["a/may.csv", "b/may.csv", "june.csv"]) == [
            "a/may.csv",
            "b/may.csv",
            "june.csv",
        ]

    def test_same_path_twice_exits(self, statement_paths):
        with pytest.raises(SystemExit) as exc_info:
            read_statement_files([statement_paths[0], statement_paths[0]])

        assert exc_info.value.code == 1

    def test_same_name_in_two_folders_keeps_both_files(self, tmp_path):
        """Test dedup across same-named files removes only the real duplicate."""
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        june = tmp_path / "june.csv"
        shop = statement_row(amount="-10,00", title="SHOP", reference="1")
        rent = statement_row(amount="-99,00", title="RENT", reference="2")
        june.write_text(build_statement([shop]))
        first_may = tmp_path / "a" / "may.csv"
        first_may.write_text(build_statement([shop]))
        second_may = tmp_path / "b" / "may.csv"
        second_may.write_text(build_statement([rent]))

        files = read_statement_files([str(june), str(first_may), str(second_may)])
        result = deduplicate(ingest_many(files))

        assert sorted(t.title for t in result.transactions) == ["RENT", "SHOP"]
        assert result.removed_count == 1

    def test_check_prints_each_same_named_file(self, tmp_path, test_config, capsys):
        paths = []
        for folder in ("a", "b"):
            (tmp_path / folder).mkdir()
            path = tmp_path / folder / "may.csv"
            path.write_text(build_statement([statement_row()]))
            paths.append(str(path))

        cmd_check(Namespace(files=paths), test_config)

        output = capsys.readouterr().out
        assert output.count("  Transactions: 1") == 2
        assert "Total transactions: 2" in output


def test_contributors(statement_paths, test_config, capsys):
    cmd_contributors(Namespace(files=statement_paths, limit=None), test_config)

    output = capsys.readouterr().out
    assert output.index("Alex") < output.index("Jordan")


class TestCategoryCommands:
    """Tests for the categories command."""

    def test_add_then_list(self, test_config, capsys):
        args = Namespace(pattern=" PRISMA ", category="Groceries", match="contains", mappings=None)

        cmd_add(args, test_config)
        cmd_list(Namespace(mappings=None), test_config)

        document = read_mapping_file(test_config.mappings_file)
        assert [(r.pattern, r.match_type) for r in document.categories] == [
            ("PRISMA", "contains")
        ]
        assert "Total rules: 1" in capsys.readouterr().out

    def test_add_invalid_rule_exits(self, test_config):
        args = Namespace(pattern="", category="Groceries", match="exact", mappings=None)

        with pytest.raises(SystemExit):
            cmd_add(args, test_config)

    def test_suggest(self, statement_paths, test_config, capsys):
        cmd_suggest(Namespace(files=statement_paths, mappings=None, limit=5), test_config)

        output = capsys.readouterr().out
        assert "PRISMA KAMPPI" in output
        assert "(0% of spending)" in output


def test_report_with_export(statement_paths, test_config, capsys):
    args = Namespace(
        files=statement_paths,
        mappings=None,
        contributors=None,
        keep_duplicates=False,
        export=True,
    )

    cmd_report(args, test_config)

    assert (test_config.export_dir / "202406-bank-export.zip").exists()
    assert "Alex" in capsys.readouterr().out


def test_report_ignores_undecodable_mappings(statement_paths, tmp_path, test_config, capsys):
    """Test a mapping file that is not UTF-8 does not stop the report."""
    mappings = tmp_path / "groupings.json"
    mappings.write_bytes(b"\xff\xfe{not json")
    args = Namespace(
        files=statement_paths,
        mappings=str(mappings),
        contributors=None,
        keep_duplicates=False,
        export=False,
    )

    cmd_report(args, test_config)

    assert "Cash flow" in capsys.readouterr().out
