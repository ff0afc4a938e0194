"""Tests for the greeting, calc, time and generate-image tools."""

import base64
from datetime import datetime

import pytest

from my_mcp_server.config import settings
from my_mcp_server.dispatcher import Dispatcher, OperationRequest
from my_mcp_server.registry import ExternalServiceError, OperationKind
from my_mcp_server.registry.operations import build_registry
from my_mcp_server.registry.operations import tool_operations


class FakeImageGenerator:
    """Returns canned PNG bytes or raises."""

    def __init__(self, png=b"\x89PNG fake", error=None):
        self.png = png
        self.error = error
        self.prompts = []

    async def generate_png(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.png


@pytest.fixture
def image_generator():
    return FakeImageGenerator()


@pytest.fixture
def dispatcher(image_generator, monkeypatch):
    """Dispatcher over the default operations with a fake image generator."""
    monkeypatch.setitem(settings.FEATURE_FLAGS, "image_generation", True)
    return Dispatcher(build_registry(image_generator))


async def call(dispatcher, name, /, **arguments):
    return await dispatcher.handle(OperationRequest(OperationKind.TOOL, name, arguments))


class TestGreeting:
    """Greeting tool."""

    @pytest.mark.asyncio
    async def test_case_insensitive_language(self, dispatcher):
        envelope = await call(dispatcher, "greeting", name="Sara", language="KOREAN")

        assert envelope.texts() == ["안녕하세요, Sara!"]

    @pytest.mark.asyncio
    async def test_unknown_language_falls_back_to_english(self, dispatcher):
        envelope = await call(dispatcher, "greeting", name="X", language="klingon")

        assert envelope.texts() == ["Hello, X!"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("language,expected", [
        ("japanese", "こんにちは, Kim!"),
        ("French", "Bonjour, Kim!"),
        ("german", "Hallo, Kim!"),
    ])
    async def test_table_entries(self, dispatcher, language, expected):
        envelope = await call(dispatcher, "greeting", name="Kim", language=language)

        assert envelope.texts() == [expected]

    @pytest.mark.asyncio
    async def test_deterministic(self, dispatcher):
        first = await call(dispatcher, "greeting", name="A", language="spanish")
        second = await call(dispatcher, "greeting", name="A", language="spanish")

        assert first == second

    @pytest.mark.asyncio
    async def test_missing_language(self, dispatcher):
        envelope = await call(dispatcher, "greeting", name="A")

        assert envelope.is_error is True
        assert "language" in envelope.texts()[0]


class TestCalc:
    """Calculator tool."""

    @pytest.mark.asyncio
    async def test_division(self, dispatcher):
        envelope = await call(dispatcher, "calc", num1=6, num2=3, operator="/")

        assert envelope.is_error is False
        assert envelope.texts() == ["6 / 3 = 2"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("num1,num2,operator,expected", [
        (1, 2, "+", "1 + 2 = 3"),
        (5, 7, "-", "5 - 7 = -2"),
        (1.5, 4, "*", "1.5 * 4 = 6"),
        (1, 4, "/", "1 / 4 = 0.25"),
        (0.1, 0.2, "+", "0.1 + 0.2 = 0.30000000000000004"),
        (1e300, 1, "*", "1e+300 * 1 = 1e+300"),
        (1e21, 10, "/", "1e+21 / 10 = 100000000000000000000"),
        (1, 1e7, "/", "1 / 10000000 = 1e-7"),
        (1, 100000, "/", "1 / 100000 = 0.00001"),
        (10 ** 21, 1, "*", "1e+21 * 1 = 1e+21"),
    ])
    async def test_operators(self, dispatcher, num1, num2, operator, expected):
        envelope = await call(dispatcher, "calc", num1=num1, num2=num2, operator=operator)

        assert envelope.texts() == [expected]

    @pytest.mark.asyncio
    async def test_divide_by_zero(self, dispatcher):
        envelope = await call(dispatcher, "calc", num1=5, num2=0, operator="/")

        assert envelope.is_error is True
        assert "divide by zero" in envelope.texts()[0]

    @pytest.mark.asyncio
    async def test_unsupported_operator_lists_supported(self, dispatcher):
        envelope = await call(dispatcher, "calc", num1=1, num2=2, operator="^")

        assert envelope.is_error is True
        message = envelope.texts()[0]
        for operator in ("+", "-", "*", "/"):
            assert operator in message

    @pytest.mark.asyncio
    async def test_numeric_string_rejected(self, dispatcher):
        envelope = await call(dispatcher, "calc", num1="6", num2=3, operator="/")

        assert envelope.is_error is True
        assert "num1" in envelope.texts()[0]


class TestTime:
    """Time tool."""

    @pytest.mark.asyncio
    async def test_formats_in_requested_zone(self, dispatcher, monkeypatch):
        monkeypatch.setattr(
            tool_operations,
            "_now",
            lambda tz: datetime(2025, 1, 15, 14, 30, 45, tzinfo=tz),
        )

        envelope = await call(dispatcher, "time", timezone="Asia/Seoul")

        assert envelope.texts() == ["Asia/Seoul current time: 2025. 01. 15. 14:30:45"]

    @pytest.mark.asyncio
    async def test_zone_key_matched_case_insensitively(self, dispatcher, monkeypatch):
        zones = []

        def fake_now(tz):
            zones.append(str(tz))
            return datetime(2025, 1, 15, 14, 30, 45, tzinfo=tz)

        monkeypatch.setattr(tool_operations, "_now", fake_now)

        envelope = await call(dispatcher, "time", timezone="asia/seoul")

        assert envelope.is_error is False
        assert zones == ["Asia/Seoul"]
        assert envelope.texts() == ["asia/seoul current time: 2025. 01. 15. 14:30:45"]

    @pytest.mark.asyncio
    async def test_real_clock_shape(self, dispatcher):
        envelope = await call(dispatcher, "time", timezone="Europe/London")

        assert envelope.is_error is False
        assert envelope.texts()[0].startswith("Europe/London current time: ")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timezone", ["Not/AZone", "", "../etc/passwd"])
    async def test_invalid_timezone(self, dispatcher, timezone):
        envelope = await call(dispatcher, "time", timezone=timezone)

        assert envelope.is_error is True
        assert "invalid timezone" in envelope.texts()[0]


class TestGenerateImage:
    """Image generation tool."""

    @pytest.mark.asyncio
    async def test_success_returns_png_image(self, dispatcher, image_generator):
        envelope = await call(dispatcher, "generate-image", prompt="a red fox")

        assert envelope.is_error is False
        image = envelope.content[0]
        assert image.type == "image"
        assert image.mimeType == "image/png"
        assert base64.b64decode(image.data) == b"\x89PNG fake"
        assert image.annotations.audience == ["user"]
        assert image.annotations.priority == 0.9
        assert image_generator.prompts == ["a red fox"]

    @pytest.mark.asyncio
    async def test_external_failure(self, image_generator, dispatcher):
        image_generator.error = ExternalServiceError("Image generation error: 503")

        envelope = await call(dispatcher, "generate-image", prompt="a red fox")

        assert envelope.is_error is True
        assert envelope.texts() == ["Image generation error: 503"]

    def test_disabled_flag_skips_registration(self, monkeypatch):
        monkeypatch.setitem(settings.FEATURE_FLAGS, "image_generation", False)

        registry = build_registry(FakeImageGenerator())

        assert registry.names(OperationKind.TOOL) == ["greeting", "calc", "time"]
