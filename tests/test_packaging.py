import re
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


class TestPackageMetadata:
    def test_readme_is_the_project_readme(self):
        pyproject = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        match = re.search(r'^readme = "([^"]+)"', pyproject, re.MULTILINE)

        assert match is not None
        assert match.group(1) == "README.md"
        assert "docextract" in (ROOT / match.group(1)).read_text(encoding="utf-8")
