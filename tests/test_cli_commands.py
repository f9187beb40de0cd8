import logging

import yaml
from click.testing import CliRunner

from sbml_rules.cli import sbml_rules

CYCLIC_YAML = """\
model:
  parameters:
    - {id: X, constant: false}
    - {id: Y, constant: false}
  rules:
    - {kind: assignment, variable: X, math: Y + 1}
    - {kind: assignment, variable: Y, math: X}
"""


def _rule_variables(path):
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return [r.get("variable") for r in data["model"]["rules"]]


def test_sort_writes_output(cascade_yaml, tmp_path):
    out = tmp_path / "sorted.yml"
    result = CliRunner().invoke(sbml_rules, ["sort", str(cascade_yaml), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Sorted 3 assignment rule(s)" in result.output
    assert _rule_variables(out) == ["B", "A", "C", "R"]
    # source untouched when an output path is given
    assert _rule_variables(cascade_yaml) == ["R", "A", "B", "C"]


def test_sort_in_place(cascade_yaml):
    result = CliRunner().invoke(sbml_rules, ["sort", str(cascade_yaml)])
    assert result.exit_code == 0, result.output
    assert _rule_variables(cascade_yaml) == ["B", "A", "C", "R"]


def test_sort_disabled_keeps_order(cascade_yaml):
    result = CliRunner().invoke(sbml_rules, ["sort", str(cascade_yaml), "--no-sort-rules"])
    assert result.exit_code == 0, result.output
    assert _rule_variables(cascade_yaml) == ["R", "A", "B", "C"]


def test_sort_rejects_inconsistent_document(write_yaml):
    path = write_yaml(CYCLIC_YAML)
    before = path.read_text(encoding="utf-8")
    result = CliRunner().invoke(sbml_rules, ["sort", str(path)])
    assert result.exit_code == 1
    assert "assignment-rule-cycle" in result.output
    assert path.read_text(encoding="utf-8") == before


def test_check_passes_and_fails(cascade_yaml, write_yaml):
    runner = CliRunner()
    ok = runner.invoke(sbml_rules, ["check", str(cascade_yaml)])
    assert ok.exit_code == 0, ok.output
    assert "PASSED" in ok.output

    bad = runner.invoke(sbml_rules, ["check", str(write_yaml(CYCLIC_YAML, "cyclic.yml"))])
    assert bad.exit_code == 1
    assert "FAILED (1 error(s))" in bad.output


def test_deps_prints_graph_order_and_cycles(cascade_yaml, write_yaml):
    runner = CliRunner()
    result = runner.invoke(sbml_rules, ["deps", str(cascade_yaml)])
    assert result.exit_code == 0, result.output
    assert "A <- B" in result.output
    assert "C <- A, B" in result.output
    assert "Order: B A C" in result.output

    cyclic = runner.invoke(sbml_rules, ["deps", str(write_yaml(CYCLIC_YAML, "c.yml"))])
    assert "Cycle: X Y" in cyclic.output


def test_unloadable_document_reports_error(write_yaml):
    path = write_yaml("model:\n  rules:\n    - {kind: assignment, variable: A, math: 'B +'}\n")
    result = CliRunner().invoke(sbml_rules, ["check", str(path)])
    assert result.exit_code == 1
    assert "Cannot load" in result.output


def test_log_level_option(cascade_yaml, caplog):
    package_logger = logging.getLogger("sbml_rules")
    try:
        result = CliRunner().invoke(
            sbml_rules, ["--log-level", "DEBUG", "deps", str(cascade_yaml)]
        )
    finally:
        package_logger.setLevel(logging.NOTSET)
    assert result.exit_code == 0, result.output
    debug = [
        r.getMessage()
        for r in caplog.records
        if r.levelno == logging.DEBUG and r.name.startswith("sbml_rules")
    ]
    assert "Rule order: ['B', 'A', 'C']" in debug


def test_very_long_formula_reports_load_error(write_yaml):
    formula = " + ".join(["k1"] * 3000)
    path = write_yaml(
        "model:\n"
        "  parameters:\n"
        "    - {id: k1}\n"
        "    - {id: A, constant: false}\n"
        "  rules:\n"
        f"    - {{kind: assignment, variable: A, math: '{formula}'}}\n"
    )
    result = CliRunner().invoke(sbml_rules, ["check", str(path)])
    assert result.exit_code == 1
    assert "Cannot load" in result.output
