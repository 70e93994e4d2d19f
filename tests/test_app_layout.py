from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_templates_resolve_to_repo_root(client):
    (searchpath,) = client.application.jinja_loader.searchpath

    templates = Path(searchpath).resolve()
    assert templates == REPO_ROOT / "templates"
    assert (templates / "report" / "monthly_print.html").is_file()
    assert (templates / "admin" / "staff.html").is_file()


def test_installed_packages_match_import_path():
    pyproject = (REPO_ROOT / "pyproject.toml").read_text(encoding="utf-8")

    assert 'include = ["src*", "config*"]' in pyproject
    assert (REPO_ROOT / "src" / "workshop_attendance" / "workshop_attendance" / "main.py").is_file()
