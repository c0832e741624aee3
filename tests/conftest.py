import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path, monkeypatch):
    """Project dir with tplc.yaml and a couple of templates; cwd is switched to it."""
    root = tmp_path
    write(
        root / "tplc.yaml",
        textwrap.dedent("""
        strict_close_tags: false
        paths:
          - templates
          - "shared\\\\partials"
        """).strip() + "\n",
    )
    write(
        root / "templates" / "page.tpl",
        "{% extends base.tpl %}{# page #}\n"
        "{% block content %}Hello {{ user.name }}!{% endblock %}\n",
    )
    write(root / "templates" / "broken.tpl", "{% if x %}never closed\n")
    monkeypatch.chdir(root)
    return root
