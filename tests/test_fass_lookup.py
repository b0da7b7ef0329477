import pytest

from fass_lookup import DISCLAIMER, format_otc, lookup_medication, main, render_report
from fass_medications import MEDICATIONS, OTC, RX, conditional_otc, resolve


def test_format_otc():
    assert format_otc(OTC) == "Yes (receptfritt)"
    assert format_otc(RX) == "No (receptbelagt)"
    assert format_otc(OTC, short=True) == "Yes"
    assert format_otc(RX, short=True) == "No (Rx)"
    assert format_otc(conditional_otc("Gel OTC, tablets Rx")) == "Gel OTC, tablets Rx"


def test_report_for_known_brand():
    report = lookup_medication("Alvedon")
    assert report.startswith("## Swedish Medication Lookup: Alvedon\n")
    assert "### Paracetamol (Alvedon, Panodil, Pamol)" in report
    assert "**OTC:** Yes (receptfritt)" in report
    assert "**ATC Code:** N02BE01" in report
    assert "🔗 https://fass.se/search?query=Alvedon" in report
    assert report.endswith(DISCLAIMER[-1])


def test_report_for_conditional_otc():
    report = lookup_medication("omeprazol")
    assert "**OTC:** Low dose OTC, higher doses Rx" in report


def test_report_for_unknown_name_has_only_fallback():
    report = lookup_medication("notreal")
    assert 'No quick info available for "notreal" in local database.' in report
    assert "**Use:**" not in report
    assert "### Full Information on FASS" in report
    assert "https://fass.se/search?query=notreal" in report


def test_report_lists_suggestions():
    report = lookup_medication("alvedn")
    assert "Did you mean: paracetamol" in report


@pytest.mark.parametrize("argv", [[], ["-h"], ["--help"], ["paracetamol", "--help"], ["-l", "-h"]])
def test_help(argv, capsys):
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Usage: fass-lookup <medication_name>" in out
    for med in MEDICATIONS:
        assert f"  - {med.key} ({', '.join(med.brands)})" in out


@pytest.mark.parametrize("argv", [["-l"], ["--list"], ["ipren", "-l"], ["--list", "alvedon"]])
def test_list(argv, capsys):
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert out.startswith("Available medications:")
    assert "omeprazol (Losec, Omeprazol)" in out
    assert "  OTC: Low dose OTC, higher doses Rx" in out
    assert "  OTC: No (Rx)" in out
    assert "Usage:" not in out
    assert "## Swedish Medication Lookup" not in out


def test_query_words_are_joined(capsys):
    assert main(["alvedon", "500mg"]) == 0
    out = capsys.readouterr().out
    assert "## Swedish Medication Lookup: alvedon 500mg" in out
    assert "https://fass.se/search?query=alvedon%20500mg" in out


def test_lookup_from_command_line(capsys):
    assert main(["Ipren"]) == 0
    assert "### Ibuprofen (Ipren, Ibumetin, Brufen)" in capsys.readouterr().out


def test_unknown_option_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["--bogus"])
    assert exc.value.code == 2


@pytest.mark.parametrize("argv", [["--li"], ["--he"], ["--hel"]])
def test_abbreviated_options_are_rejected(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
    assert "Available medications" not in capsys.readouterr().out


def test_undecodable_argument_is_replaced(capsys):
    assert main(["alvedon\udcff"]) == 0
    out = capsys.readouterr().out
    assert "## Swedish Medication Lookup: alvedon�" in out
    assert "https://fass.se/search?query=alvedon%EF%BF%BD" in out


def test_render_report_uses_given_result():
    report = render_report("whatever", resolve("Losec"))
    assert "## Swedish Medication Lookup: whatever" in report
    assert "### Omeprazol (Losec, Omeprazol)" in report
