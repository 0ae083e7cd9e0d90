import json

import pytest

from auto_i18n.manager import main


@pytest.fixture
def project(tmp_path):
    components = tmp_path / "src" / "components"
    components.mkdir(parents=True)
    (components / "Hello.tsx").write_text(
        'export function Hello({ name }) {\n'
        '  return <p title="인사">{`${name}님, 안녕하세요`}</p>;\n'
        '}\n',
        encoding="utf-8",
    )
    return tmp_path


def test_check_then_wrap_then_check(project, capsys):
    root = str(project)
    assert main(["check", "--project-root", root]) == 1
    assert "❌" in capsys.readouterr().out

    assert main(["wrap", "--project-root", root]) == 0
    hello = (project / "src" / "components" / "Hello.tsx").read_text(encoding="utf-8")
    assert 'title={t("인사")}' in hello
    assert '{t("{{name}}님, 안녕하세요", { "name": name })}' in hello

    assert main(["check", "--project-root", root]) == 0
    assert "✅" in capsys.readouterr().out


def test_dry_run_keeps_files(project):
    path = project / "src" / "components" / "Hello.tsx"
    before = path.read_text(encoding="utf-8")
    assert main(["wrap", "--project-root", str(project), "--dry-run"]) == 0
    assert path.read_text(encoding="utf-8") == before


def test_wrap_merges_catalogs_and_stats(project, capsys):
    (project / "auto-i18n.json").write_text(
        json.dumps({"target_locales": ["en"]}), encoding="utf-8"
    )
    assert main(["wrap", "--project-root", str(project), "--merge-catalog"]) == 0

    locales = project / "src" / "locales"
    ko = json.loads((locales / "ko.json").read_text(encoding="utf-8"))
    en = json.loads((locales / "en.json").read_text(encoding="utf-8"))
    assert ko == {"인사": "인사", "{{name}}님, 안녕하세요": "{{name}}님, 안녕하세요"}
    assert en == {"인사": "", "{{name}}님, 안녕하세요": ""}

    capsys.readouterr()
    assert main(["stats", "--locales-dir", str(locales)]) == 0
    out = capsys.readouterr().out
    assert "ko" in out and "2/2" in out
    assert "0/2" in out


def test_contexts_lists_components(project, capsys):
    assert main(["contexts", "--project-root", str(project)]) == 0
    assert "Hello" in capsys.readouterr().out


def test_bad_config_exits_with_error(project, capsys):
    (project / "auto-i18n.json").write_text('{"scripts": ["klingon"]}', encoding="utf-8")
    assert main(["wrap", "--project-root", str(project)]) == 2
    assert "❌" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1


def test_check_fails_on_unparsable_file(tmp_path, capsys):
    (tmp_path / "Broken.tsx").write_text("function Broken( {\n", encoding="utf-8")
    assert main(["check", "--project-root", str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "Broken.tsx" in out
    assert "✅" not in out
