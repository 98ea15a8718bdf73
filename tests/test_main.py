import main


def test_main_yearly_run(capsys):
    assert main.main(["--variant", "yearly"]) == 0
    out = capsys.readouterr().out
    assert "Total calls:" in out
    assert "Pipeline complete." in out


def test_main_agent_run_with_filters(capsys):
    assert main.main(["--window", "all_time", "--level", "team", "--value", "T1"]) == 0
    out = capsys.readouterr().out
    assert "Team 'T1'" in out


def test_main_agent_run_no_data(capsys):
    assert main.main(["--level", "agent", "--value", "nobody"]) == 0
    assert "No data for the selected filters." in capsys.readouterr().out


def test_main_missing_file_fails(tmp_path):
    assert main.main([str(tmp_path / "missing.csv")]) == 1


def test_main_simulate(tmp_path, capsys):
    assert main.main(["--simulate", str(tmp_path)]) == 0
    assert (tmp_path / "agent_calls_kpi_dashboard.csv").exists()
    assert (tmp_path / "call_center_kpis.csv").exists()
