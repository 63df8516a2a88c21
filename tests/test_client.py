from __future__ import annotations

from pathlib import Path

import pytest

from conftest import ScriptedConsole

from paysimple_sample.client import build_parser, run_client
from paysimple_sample.config import REQUIRED_KEYS


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.config == "paysimple.env"
    assert args.account_type == "credit-card"
    assert not args.collapse_duplicate_errors
    assert not args.verbose


@pytest.mark.asyncio
async def test_missing_setting_is_reported_and_exits_cleanly(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for env_name in REQUIRED_KEYS.values():
        monkeypatch.delenv(env_name, raising=False)
    config = tmp_path / "app.env"
    config.write_text("ApiKey=k\nApiUrl=https://x\n", encoding="utf-8")
    console = ScriptedConsole()

    status = await run_client(build_parser().parse_args(["--config", str(config)]), console)

    assert status == 0
    assert console.lines == ["Username is missing from app.env"]
    assert console.prompts == []
