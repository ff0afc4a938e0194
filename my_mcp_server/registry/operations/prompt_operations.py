"""
Prompt operation registrations.

Registers the code-review prompt template.
"""

from typing import Any, Dict, List

from mcp.types import PromptMessage

from ...utils.response import user_message
from ..operation_registry import OperationDescriptor, OperationKind, OperationRegistry
from ..validator import ParameterSpec, ParamType

CODE_REVIEW_TEMPLATE = """다음 코드를 리뷰해주세요. 아래 항목들을 확인해주세요:

1. 코드 품질: 가독성, 명명 규칙, 코드 구조
2. 버그 가능성: 잠재적인 오류나 예외 상황
3. 성능: 최적화 가능한 부분
4. 보안: 보안 취약점 여부
5. 개선 제안: 더 나은 방법이 있다면 제안

코드:
```
{code}
```

한국어로 상세하게 리뷰해주세요."""


def code_review_handler(params: Dict[str, Any]) -> List[PromptMessage]:
    """Embed the code verbatim in the review instruction."""
    return [user_message(CODE_REVIEW_TEMPLATE.format(code=params["code"]))]


CODE_REVIEW = OperationDescriptor(
    name="code-review",
    kind=OperationKind.PROMPT,
    description="Review the given code",
    parameters={
        "code": ParameterSpec(ParamType.STRING, "Code to review"),
    },
    handler=code_review_handler,
)


def register_prompt_operations(registry: OperationRegistry) -> None:
    """Register all prompt operations."""
    registry.register(CODE_REVIEW)
