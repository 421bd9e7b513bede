from __future__ import annotations

from pathlib import Path

import pytest

from readmegen.config import Settings
from readmegen.logging import get_logger

from tests._fixtures.fake_github import FakeContentClient


@pytest.fixture(autouse=True)
def _isolate_logging():
    """Undo configure_logging() side effects so caplog keeps seeing readmegen records."""
    logger = get_logger()
    handlers = list(logger.handlers)
    level = logger.level
    logger.propagate = True
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = True


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    settings = Settings()
    settings.github.token = "gh-token"
    settings.llm.api_key = "sk-test"
    settings.store_path = tmp_path / "state.json"
    return settings


@pytest.fixture
def sample_client() -> FakeContentClient:
    return FakeContentClient(
        {
            "package.json": '{"name": "demo", "dependencies": {"react": "^18.2.0"}}',
            "README.md": "# Demo\n\nA demo app.",
            "src/utils.js": "export const sum = (a, b) => a + b;",
            "src/index.js": "import App from './app';",
            "src/app.jsx": "export default function App() {}",
            "src/main.ts": "console.log('main');",
            "src/x.test.js": "test('x', () => {});",
            "src/y.config.js": "module.exports = {};",
        }
    )
