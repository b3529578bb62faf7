"""Tests for core infrastructure modules."""

import asyncio
import json
import logging
import pytest
from botocore.exceptions import ClientError
from pydantic import ValidationError

from ec2kit.base.config import EC2Config, LATEST_API_VERSION, validate_config
from ec2kit.base.logger import EC2KitLogger, StructuredFormatter
from ec2kit.base.async_support import AsyncMixin


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY",
                "AWS_SESSION_TOKEN", "AWS_ENDPOINT_URL_EC2"):
        monkeypatch.delenv(var, raising=False)


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestEC2Config:
    def test_explicit_values(self, clean_env):
        cfg = EC2Config(
            region_name="us-west-2",
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
        )
        assert cfg.aws_access_key_id == "AKIA"
        assert cfg.region_name == "us-west-2"
        assert cfg.api_version == LATEST_API_VERSION

    def test_env_fallback(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        monkeypatch.setenv("AWS_ENDPOINT_URL_EC2", "http://localhost:4566")
        cfg = EC2Config(region_name="eu-west-1")
        assert cfg.aws_access_key_id == "env_key"
        assert cfg.endpoint_url == "http://localhost:4566"

    def test_left_unset_for_boto_chain(self, clean_env):
        cfg = EC2Config(region_name="eu-west-1")
        assert cfg.aws_access_key_id is None
        assert cfg.aws_session_token is None

    def test_extra_forbidden(self, clean_env):
        with pytest.raises(ValidationError):
            EC2Config(region_name="eu-west-1", project_id="p")

    def test_explicit_keys_ignore_env_session(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_SESSION_TOKEN", "token-from-other-session")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        cfg = EC2Config(region_name="eu-west-1", aws_access_key_id="AKIAEXPLICIT")
        assert cfg.aws_session_token is None
        assert cfg.aws_secret_access_key is None

    def test_env_session_used_with_env_keys(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        monkeypatch.setenv("AWS_SESSION_TOKEN", "env_token")
        cfg = EC2Config(region_name="eu-west-1")
        assert cfg.aws_session_token == "env_token"

    def test_endpoint_env_with_explicit_keys(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ENDPOINT_URL_EC2", "http://localhost:4566")
        cfg = EC2Config(region_name="eu-west-1", aws_access_key_id="k", aws_secret_access_key="s")
        assert cfg.endpoint_url == "http://localhost:4566"


class TestValidateConfig:
    def test_region_always_wins(self, clean_env):
        cfg = validate_config("eu-west-1", {"region_name": "us-east-1"})
        assert cfg.region_name == "eu-west-1"

    def test_no_config(self, clean_env):
        cfg = validate_config("ap-south-1")
        assert cfg.client_kwargs()["region_name"] == "ap-south-1"



# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestEC2KitLogger:
    def test_log_operation(self, capfd):
        logger = EC2KitLogger("test_ec2kit")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("test message", region="eu-west-1", operation="stop_instance")
        captured = capfd.readouterr()
        assert "test message" in captured.err
        assert "eu-west-1" in captured.err

    def test_unknown_context_rejected(self):
        logger = EC2KitLogger("test_ec2kit")
        with pytest.raises(TypeError, match="provider"):
            logger.info("hi", provider="aws")

    def test_log_client_error(self, capfd):
        logger = EC2KitLogger("test_ec2kit_errors")
        err = ClientError(
            {"Error": {"Code": "InvalidInstanceID.NotFound", "Message": "gone"}}, "StopInstances"
        )
        logger.log_client_error(err, operation="stop_instance", instance_id="i-abc")
        entry = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert entry["level"] == "ERROR"
        assert entry["error_code"] == "InvalidInstanceID.NotFound"
        assert entry["operation"] == "stop_instance"
        assert entry["instance_id"] == "i-abc"
        assert entry["message"] == "stop_instance failed: InvalidInstanceID.NotFound"

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.instance_id = "i-abc"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"instance_id": "i-abc"' in output
        assert '"request_id": "abc"' in output
        assert "region" not in output


# ══════════════════════════════════════════════════════════════════════
# Async Support
# ══════════════════════════════════════════════════════════════════════

class TestAsyncMixin:
    def test_auto_generates(self):
        class MyService(AsyncMixin):
            def do_work(self, x: int) -> int:
                return x * 2

        svc = MyService()
        assert MyService.ado_work.__name__ == "ado_work"
        assert asyncio.run(svc.ado_work(5)) == 10
        assert MyService.async_operations == ("do_work",)

    def test_skips_private_and_coroutines(self):
        class MyService(AsyncMixin):
            def _helper(self) -> None:
                pass

            async def already_async(self) -> None:
                pass

        assert not hasattr(MyService, "a_helper")
        assert not hasattr(MyService, "aalready_async")
        assert MyService.async_operations == ()

    def test_twin_awaits_subclass_override(self):
        class Base(AsyncMixin):
            def name(self) -> str:
                return "base"

        class Child(Base):
            def name(self) -> str:
                return "child"

        assert asyncio.run(Child().aname()) == "child"
        assert Child.async_operations == ("name",)
