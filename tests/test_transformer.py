import logging

import pytest

from auto_i18n.config import WrapConfig
from auto_i18n.transformer import ProjectTransformer


@pytest.fixture
def project(tmp_path):
    src = tmp_path / "src"
    (src / "components").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)

    (src / "components" / "Hello.tsx").write_text(
        'export function Hello() {\n  return <p>안녕</p>;\n}\n', encoding="utf-8"
    )
    (src / "components" / "Plain.jsx").write_text(
        'export const Plain = () => <p>Hello</p>;\n', encoding="utf-8"
    )
    (src / "Broken.tsx").write_text("function Broken( {\n", encoding="utf-8")
    (src / "util.ts").write_text('export const TITLE = "제목";\n', encoding="utf-8")
    (tmp_path / "node_modules" / "lib" / "Vendor.tsx").write_text(
        'export const Vendor = () => <p>벤더</p>;\n', encoding="utf-8"
    )
    return tmp_path


def test_find_files_respects_extensions_and_excludes(project):
    transformer = ProjectTransformer(project)
    files = [p.relative_to(project).as_posix() for p in transformer.find_files()]
    assert files == [
        "src/Broken.tsx",
        "src/components/Hello.tsx",
        "src/components/Plain.jsx",
    ]


def test_run_writes_changed_files_and_skips_broken(project, caplog):
    transformer = ProjectTransformer(project)
    with caplog.at_level(logging.WARNING, logger="auto_i18n.transformer"):
        results = transformer.run(write=True)

    hello = (project / "src" / "components" / "Hello.tsx").read_text(encoding="utf-8")
    assert '<p>{t("안녕")}</p>' in hello
    assert "const { t } = useTranslation();" in hello

    report = transformer.generate_report(results)
    assert report["files_total"] == 3
    assert report["files_changed"] == 1
    assert report["files_skipped"] == 1
    assert report["jsx_texts"] == 1
    assert report["hooks_injected"] == 1
    assert "src/Broken.tsx" in report["skipped"]
    assert "[SKIP]" in caplog.text

    vendor = (project / "node_modules" / "lib" / "Vendor.tsx").read_text(encoding="utf-8")
    assert "t(" not in vendor


def test_dry_run_does_not_write(project):
    hello_path = project / "src" / "components" / "Hello.tsx"
    before = hello_path.read_text(encoding="utf-8")

    results = ProjectTransformer(project).run(write=False)
    assert hello_path.read_text(encoding="utf-8") == before
    assert any(r.result is not None and r.result.changed for r in results)


def test_rerun_changes_nothing(project):
    transformer = ProjectTransformer(project)
    transformer.run(write=True)
    report = transformer.generate_report(transformer.run(write=True))
    assert report["files_changed"] == 0


def test_custom_extensions(project):
    config = WrapConfig(extensions=[".ts"])
    files = ProjectTransformer(project, config).find_files()
    assert [p.name for p in files] == ["util.ts"]


def test_collect_keys_is_ordered_and_unique(project):
    (project / "src" / "components" / "Again.tsx").write_text(
        'export function Again() {\n  return <div title="제목">안녕</div>;\n}\n',
        encoding="utf-8",
    )
    results = ProjectTransformer(project).run(write=False)
    assert ProjectTransformer.collect_keys(results) == ["제목", "안녕"]


def test_lone_surrogate_escape_is_written(project):
    path = project / "src" / "components" / "Odd.tsx"
    path.write_text(
        'export function Odd() {\n  const s = "안녕\\uD800";\n  return <p>{s}</p>;\n}\n',
        encoding="utf-8",
    )
    result = ProjectTransformer(project).transform_file(path, write=True)
    assert not result.skipped
    assert 't("안녕\\\\uD800")' in path.read_text(encoding="utf-8")
