import pytest

from tidyground.commands.tutorial import build_parser, main


@pytest.fixture(autouse=True)
def environ(monkeypatch, tidyground_logger, data_home, tmp_path):
    monkeypatch.setenv("TIDYGROUND_DATA_HOME", str(data_home))
    monkeypatch.setenv("TIDYGROUND_DATASETS_URL", "http://datasets.invalid/csv")
    monkeypatch.setenv("TIDYGROUND_OUTPUT_DIR", str(tmp_path / "plots"))
    monkeypatch.setenv("TIDYGROUND_DPI", "30")
    monkeypatch.delenv("TIDYGROUND_LOG_LEVEL", raising=False)


def test_parser():
    args = build_parser().parse_args(["data-transformation", "-s", "select", "-vv"])
    assert args.chapter == "data-transformation"
    assert args.section == "select"
    assert args.verbose == 2
    assert not args.list


def test_list(capsys):
    assert main(["data-transformation", "--list", "--section", "arrange"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Data transformation (http://r4ds.had.co.nz/transform.html)"
    assert lines[1] == (
        "  02 [arrange] arrange_by_date (flights): "
        "Each additional column breaks ties in the values of the preceding ones."
    )
    assert len(lines) == 3


def test_list_example_without_datasets(capsys):
    assert main(["data-visualisation", "-l", "-s", "stats"]) == 0
    out = capsys.readouterr().out
    assert "bar_identity (-):" in out
    assert "bar_cut (diamonds):" in out


def test_run_table_example(capsys):
    assert main(["data-transformation", "--example", "select_date"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("## 04 select_date: select_date\n# A table: 90 x 3\n")
    assert "year | month | day" in out


def test_run_plot_example(capsys, tmp_path):
    output_dir = tmp_path / "elsewhere"
    argv = ["data-visualisation", "-e", "displ_vs_hwy", "-o", str(output_dir)]
    assert main(argv) == 0
    path = output_dir / "data-visualisation" / "01-displ_vs_hwy.png"
    assert capsys.readouterr().out == f"## 01 displ_vs_hwy: saved {path}\n"
    assert path.exists()


def test_run_section(capsys):
    assert main(["data-transformation", "-s", "summarise"]) == 0
    out = capsys.readouterr().out
    assert "## 15 mean_delay:" in out
    assert "## 16 mean_delay_by_day:" in out
    assert "# Groups: year, month" in out


@pytest.mark.parametrize(
    "argv, message",
    [
        (["exploratory-data-analysis"], "Unknown chapter 'exploratory-data-analysis'"),
        (["data-transformation", "-s", "tidy"], "Unknown section 'tidy'"),
        (["data-transformation", "-e", "jan2"], "Unknown example 'jan2'"),
    ],
)
def test_unknown_names(capsys, argv, message):
    assert main(argv) == 1
    assert capsys.readouterr().err.startswith(message)


def test_outdated_dataset(capsys, tmp_path):
    data_home = tmp_path / "data"
    data_home.mkdir()
    (data_home / "flights.csv").write_text('"rownames","year"\n1,2013\n')

    argv = ["data-transformation", "-e", "select_date", "-d", str(data_home)]
    assert main(argv) == 1
    assert capsys.readouterr().err.startswith("Column 'month' doesn't exist")
