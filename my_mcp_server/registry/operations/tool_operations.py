"""
Tool operation registrations.

Registers greeting, calc, time and generate-image.
"""

import base64
import logging
import math
from datetime import datetime, tzinfo
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from ...config.settings import is_enabled
from ...generators.image_generator import ImageGenerator
from ...utils.response import image_content
from ..errors import DomainError
from ..operation_registry import OperationDescriptor, OperationKind, OperationRegistry
from ..validator import ParameterSpec, ParamType

logger = logging.getLogger(__name__)

GREETINGS: Dict[str, str] = {
    "korean": "안녕하세요",
    "english": "Hello",
    "japanese": "こんにちは",
    "chinese": "你好",
    "spanish": "Hola",
    "french": "Bonjour",
    "german": "Hallo",
}

SUPPORTED_OPERATORS = ("+", "-", "*", "/")

# ko-KR numeric date with a 24-hour clock
TIME_FORMAT = "%Y. %m. %d. %H:%M:%S"


# ============================================================================
# Operation Handlers
# ============================================================================

def greeting_handler(params: Dict[str, Any]) -> str:
    """Greet ``name`` in ``language``; unknown languages fall back to English."""
    greeting = GREETINGS.get(params["language"].lower(), GREETINGS["english"])
    return f"{greeting}, {params['name']}!"


def _format_number(value: float) -> str:
    """Print a number the way a JSON/JavaScript client would.

    Integral values drop the ".0" (6.0 -> "6"); magnitudes of 1e21 and up
    or below 1e-6 use exponent notation ("1e+300", "1e-7"); everything in
    between is positional ("0.00001").
    """
    if isinstance(value, int):
        if abs(value) < 10 ** 21:
            return str(value)
        value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0')}"


def calc_handler(params: Dict[str, Any]) -> str:
    """Apply a binary arithmetic operator to two numbers."""
    num1 = params["num1"]
    num2 = params["num2"]
    operator = params["operator"]

    if operator == "+":
        result = num1 + num2
    elif operator == "-":
        result = num1 - num2
    elif operator == "*":
        result = num1 * num2
    elif operator == "/":
        if num2 == 0:
            raise DomainError("Error: cannot divide by zero")
        result = num1 / num2
    else:
        raise DomainError(
            f"Error: unsupported operator '{operator}' "
            f"(supported: {', '.join(SUPPORTED_OPERATORS)})"
        )

    return (
        f"{_format_number(num1)} {operator} {_format_number(num2)} "
        f"= {_format_number(result)}"
    )


def _now(tz: tzinfo) -> datetime:
    return datetime.now(tz)


@lru_cache(maxsize=1)
def _zone_keys_by_lower() -> Dict[str, str]:
    return {key.lower(): key for key in available_timezones()}


def _resolve_zone(timezone: str) -> ZoneInfo:
    """Load an IANA zone, matching the key case-insensitively ("asia/seoul")."""
    return ZoneInfo(_zone_keys_by_lower().get(timezone.lower(), timezone))


def time_handler(params: Dict[str, Any]) -> str:
    """Report the current wall-clock time in an IANA timezone."""
    timezone = params["timezone"]
    try:
        zone = _resolve_zone(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise DomainError(f"Error: invalid timezone: {timezone}") from e

    return f"{timezone} current time: {_now(zone).strftime(TIME_FORMAT)}"


def make_generate_image_handler(generator: ImageGenerator):
    """Build the generate-image handler around an image generator."""

    async def generate_image_handler(params: Dict[str, Any]) -> List[Any]:
        png = await generator.generate_png(params["prompt"])
        return [
            image_content(
                base64.b64encode(png).decode("ascii"),
                mime_type="image/png",
                audience=["user"],
                priority=0.9
            )
        ]

    return generate_image_handler


# ============================================================================
# Operation Descriptors
# ============================================================================

GREETING = OperationDescriptor(
    name="greeting",
    kind=OperationKind.TOOL,
    description="Return a greeting for the user's name in the requested language",
    parameters={
        "name": ParameterSpec(ParamType.STRING, "Name of the person to greet"),
        "language": ParameterSpec(
            ParamType.STRING,
            "Greeting language (korean, english, japanese, chinese, spanish, french, german)"
        ),
    },
    handler=greeting_handler,
)

CALC = OperationDescriptor(
    name="calc",
    kind=OperationKind.TOOL,
    description="Apply an arithmetic operator to two numbers and return the result",
    parameters={
        "num1": ParameterSpec(ParamType.NUMBER, "First number"),
        "num2": ParameterSpec(ParamType.NUMBER, "Second number"),
        "operator": ParameterSpec(ParamType.STRING, "Operator (+, -, *, /)"),
    },
    handler=calc_handler,
)

TIME = OperationDescriptor(
    name="time",
    kind=OperationKind.TOOL,
    description="Return the current time in the given timezone",
    parameters={
        "timezone": ParameterSpec(
            ParamType.STRING,
            "IANA timezone (e.g. Asia/Seoul, America/New_York, Europe/London)"
        ),
    },
    handler=time_handler,
)


def make_generate_image_operation(generator: ImageGenerator) -> OperationDescriptor:
    """Build the generate-image descriptor bound to ``generator``."""
    return OperationDescriptor(
        name="generate-image",
        kind=OperationKind.TOOL,
        description="Generate an AI image from a text prompt",
        parameters={
            "prompt": ParameterSpec(
                ParamType.STRING,
                "Description of the image to generate (English recommended)"
            ),
        },
        handler=make_generate_image_handler(generator),
    )


# ============================================================================
# Registration
# ============================================================================

def register_tool_operations(
    registry: OperationRegistry,
    image_generator: Optional[ImageGenerator] = None
) -> None:
    """Register all tool operations."""
    registry.register_all([GREETING, CALC, TIME])

    if is_enabled("image_generation"):
        registry.register(make_generate_image_operation(image_generator or ImageGenerator()))
    else:
        logger.info("Image generation disabled; generate-image not registered")
