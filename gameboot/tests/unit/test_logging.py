import json
import logging

from gameboot.utils.logging import HumanFormatter, JsonFormatter


def _record(msg, **extra):
    record = logging.LogRecord("gameboot.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_puts_extras_under_extra():
    payload = json.loads(JsonFormatter().format(_record("funding_succeeded", provider="rpc_airdrop", attempt=1)))

    assert payload["msg"] == "funding_succeeded"
    assert payload["extra"] == {"provider": "rpc_airdrop", "attempt": 1}


def test_human_formatter_summaries():
    fmt = HumanFormatter()

    line = fmt.format(_record("funding_attempt_failed", attempt=2, provider="alternate_rpc_airdrop", error="429"))
    assert line.endswith("#2 alternate_rpc_airdrop failed: 429")

    line = fmt.format(_record("step_status", step="Initializing game", state="failed"))
    assert line.endswith("Initializing game -> failed")

    line = fmt.format(_record("bootstrap_done", outcome="success", state="complete", error=None))
    assert line.endswith("outcome=success state=complete")


def test_human_formatter_flattens_unknown_extras():
    line = HumanFormatter().format(_record("airdrop_requested", lamports=5))

    assert line.endswith("airdrop_requested | lamports=5")
