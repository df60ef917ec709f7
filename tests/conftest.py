from __future__ import annotations

import pytest

from coder_chat.core.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        static_dir=str(tmp_path / "no-static"),
    )
