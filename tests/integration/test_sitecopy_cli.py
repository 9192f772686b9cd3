"""CLI tests for page listing, round trips, diffs, and diagnostics."""

from __future__ import annotations

import json
from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from sitecopy.cli import app

FOOTER_INPUT = {
    "brand": {"name": "Example", "tagline": {"zh-CN": "口号", "en": "Slogan"}},
    "quickLinks": [
        {"href": "/about", "label": {"zh-CN": "关于", "en": "About"}},
        {"href": "", "label": {"zh-CN": "无链接"}},
    ],
}


def test_pages_command_lists_registered_pages() -> None:
    """`pages` should print every registered page with its title."""

    result = CliRunner().invoke(app, ["pages"])

    assert result.exit_code == 0
    assert "footer\tFooter" in result.output
    assert "product-detail\tProduct detail" in result.output


def test_normalize_command_prints_document_with_ids(write_json) -> None:
    """`normalize` should print the editing document including stable ids."""

    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["normalize", str(input_path), "--page", "footer"])

    assert result.exit_code == 0
    document = json.loads(result.output)
    assert document["brand"]["name"] == {"zh-CN": "Example"}
    assert [link["_id"] for link in document["quickLinks"]] == ["quick-link-about", "quick-link-1"]


def test_overrides_command_prints_sparse_map(write_json) -> None:
    """`overrides` should print only non-default-locale entries."""

    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["overrides", str(input_path), "--page", "footer"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "brand": {"tagline": {"en": "Slogan"}},
        "quickLinks": {"0": {"label": {"en": "About"}}},
    }


def test_roundtrip_command_writes_payload_and_reports_change(write_json, tmp_path: Path) -> None:
    """`roundtrip --out` should save the merged payload and report that it changed."""

    input_path = write_json("footer.json", FOOTER_INPUT)
    out_path = tmp_path / "out" / "footer.json"

    result = CliRunner().invoke(
        app,
        ["roundtrip", str(input_path), "--page", "footer", "--out", str(out_path), "--stamp"],
    )

    assert result.exit_code == 0
    assert f"Payload: {out_path}" in result.output
    assert "Changed: yes" in result.output
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["brand"]["tagline"] == {"zh-CN": "口号", "en": "Slogan"}
    assert payload["quickLinks"] == [{"href": "/about", "label": {"zh-CN": "关于", "en": "About"}}]
    assert payload["_meta"]["updatedAt"].endswith("Z")


def test_roundtrip_command_reports_unchanged_canonical_input(write_json, tmp_path: Path) -> None:
    """Re-running `roundtrip` on its own output should report no change."""

    first_out = tmp_path / "first.json"
    second_out = tmp_path / "second.json"
    runner = CliRunner()
    runner.invoke(
        app,
        ["roundtrip", str(write_json("footer.json", FOOTER_INPUT)), "--page", "footer", "--out", str(first_out)],
    )

    result = runner.invoke(
        app, ["roundtrip", str(first_out), "--page", "footer", "--out", str(second_out)]
    )

    assert result.exit_code == 0
    assert "Changed: no" in result.output
    assert first_out.read_text(encoding="utf-8") == second_out.read_text(encoding="utf-8")


def test_roundtrip_command_prints_payload_without_out(write_json) -> None:
    """Without `--out` the payload is printed to stdout."""

    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["roundtrip", str(input_path), "--page", "footer"])

    assert result.exit_code == 0
    assert json.loads(result.output)["brand"]["name"] == {"zh-CN": "Example"}


def test_diff_command_prints_pointer_changes(write_json) -> None:
    """`diff` should print one marker line per change."""

    before = write_json("before.json", {"brand": {"name": {"en": "A"}}, "old": 1})
    after = write_json("after.json", {"brand": {"name": {"en": "B"}}})

    result = CliRunner().invoke(app, ["diff", str(before), str(after)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ['~ /brand/name/en "A" -> "B"', "- /old 1"]


def test_diff_command_reads_missing_and_blank_before_as_empty_document(
    write_json, tmp_path: Path
) -> None:
    """Missing and blank previous versions should both diff as `{}`."""

    after = write_json("after.json", {"a": 1})
    blank = tmp_path / "blank.json"
    blank.write_text("  \n", encoding="utf-8")
    runner = CliRunner()

    missing_result = runner.invoke(app, ["diff", str(tmp_path / "missing.json"), str(after)])
    blank_result = runner.invoke(app, ["diff", str(blank), str(after)])

    assert missing_result.exit_code == 0
    assert missing_result.output.strip() == "+ /a 1"
    assert blank_result.output == missing_result.output


def test_check_locales_command_exits_non_zero_on_gaps(write_json) -> None:
    """`check-locales` should list partial translations and exit with code 1."""

    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["check-locales", str(input_path), "--page", "footer"])

    assert result.exit_code == 1
    assert "brand.name: missing zh-TW, en" in result.output
    assert "quickLinks.1.label: missing zh-TW, en" in result.output
    assert "Fields missing locales: 4" in result.output


def test_check_locales_command_passes_complete_documents(write_json) -> None:
    """Fully translated documents should pass."""

    input_path = write_json(
        "footer.json", {"brand": {"name": {"zh-CN": "甲", "zh-TW": "甲", "en": "A"}}}
    )

    result = CliRunner().invoke(app, ["check-locales", str(input_path), "--page", "footer"])

    assert result.exit_code == 0
    assert "All localized fields are complete." in result.output


def test_unknown_page_reports_stage_error_with_hint(write_json) -> None:
    """Unknown page keys should fail at the `page` stage."""

    input_path = write_json("about.json", {})

    result = CliRunner().invoke(app, ["normalize", str(input_path), "--page", "about"])

    assert result.exit_code == 1
    assert "normalize failed at stage `page`: Unknown page `about`." in result.output
    assert "Hint: Run `sitecopy pages` to list registered pages." in result.output


def test_invalid_json_input_reports_input_stage(tmp_path: Path) -> None:
    """Malformed input files should fail at the `input` stage."""

    input_path = tmp_path / "broken.json"
    input_path.write_text("{broken", encoding="utf-8")

    result = CliRunner().invoke(app, ["overrides", str(input_path), "--page", "footer"])

    assert result.exit_code == 1
    assert "overrides failed at stage `input`" in result.output
    assert "is not valid JSON" in result.output


def test_missing_config_file_reports_config_stage(write_json, tmp_path: Path) -> None:
    """A missing `--config` path should fail at the `config` stage."""

    input_path = write_json("footer.json", FOOTER_INPUT)
    missing = tmp_path / "missing.yaml"

    result = CliRunner().invoke(
        app, ["normalize", str(input_path), "--page", "footer", "--config", str(missing)]
    )

    assert result.exit_code == 1
    assert "normalize failed at stage `config`: Config file not found" in result.output
    assert "Hint: Provide an existing path via `--config <path.yaml>`." in result.output


def test_invalid_config_file_reports_config_stage(write_json, tmp_path: Path) -> None:
    """Invalid YAML values should fail at the `config` stage with a fix hint."""

    input_path = write_json("footer.json", FOOTER_INPUT)
    config_path = tmp_path / "sitecopy.yaml"
    config_path.write_text("alignment: sideways\n", encoding="utf-8")

    result = CliRunner().invoke(
        app, ["normalize", str(input_path), "--page", "footer", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "Invalid config file" in result.output
    assert "Hint: Fix config schema/values and rerun." in result.output


def test_config_file_changes_default_locale(write_json, tmp_path: Path) -> None:
    """A YAML default locale should decide which entries become overrides."""

    input_path = write_json("footer.json", {"brand": {"name": {"zh-CN": "甲", "en": "A"}}})
    config_path = tmp_path / "sitecopy.yaml"
    config_path.write_text("default_locale: en\n", encoding="utf-8")

    result = CliRunner().invoke(
        app, ["overrides", str(input_path), "--page", "footer", "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"brand": {"name": {"zh-CN": "甲"}}}


def test_environment_config_controls_indent(write_json, monkeypatch: MonkeyPatch) -> None:
    """`SITECOPY_INDENT=0` should print compact single-line JSON."""

    monkeypatch.setenv("SITECOPY_INDENT", "0")
    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["overrides", str(input_path), "--page", "footer"])

    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 1


def test_invalid_environment_config_reports_config_stage(write_json, monkeypatch: MonkeyPatch) -> None:
    """Invalid `SITECOPY_*` values should fail at the `config` stage."""

    monkeypatch.setenv("SITECOPY_ALIGNMENT", "sideways")
    input_path = write_json("footer.json", FOOTER_INPUT)

    result = CliRunner().invoke(app, ["overrides", str(input_path), "--page", "footer"])

    assert result.exit_code == 1
    assert "overrides failed at stage `config`: Invalid environment configuration" in result.output
