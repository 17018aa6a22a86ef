from camina_segura.main import main


def test_demo_runs_with_seed(capsys):
    assert main(["--seed", "42"]) == 0
    output = capsys.readouterr().out
    assert "Ruta Más Segura" in output
    assert "Demo completed successfully" in output


def test_demo_with_sqlite_store(tmp_path, capsys):
    db_path = tmp_path / "demo.db"
    assert main(["--seed", "1", "--db", str(db_path)]) == 0
    assert db_path.exists()
