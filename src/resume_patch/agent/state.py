from typing import Annotated, Any, Optional
from typing_extensions import TypedDict

from langchain_core.messages import BaseMessage
from langgraph.graph.message import add_messages


def token_usage_reducer(
    current: dict[str, int], new: dict[str, int]
) -> dict[str, int]:
    """Accumulate token usage counters across LLM calls."""
    if not current:
        current = {}
    if not new:
        return current
    return {
        "input_tokens": current.get("input_tokens", 0) + new.get("input_tokens", 0),
        "output_tokens": current.get("output_tokens", 0) + new.get("output_tokens", 0),
        "total_tokens": current.get("total_tokens", 0) + new.get("total_tokens", 0),
        "llm_calls": current.get("llm_calls", 0) + new.get("llm_calls", 0),
    }


def operations_reducer(
    current: list[dict[str, Any]], new: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Append the operations of each committed batch, in commit order."""
    return list(current or []) + list(new or [])


class AgentState(TypedDict, total=False):
    """Complete state of the resume editing agent."""

    instruction: str

    # Canonical JSON tree of the resume; only replaced by a committed batch.
    resume: dict[str, Any]

    # SystemMessage, HumanMessage, AIMessage (with tool_calls) and ToolMessage.
    messages: Annotated[list[BaseMessage], add_messages]

    iteration_count: int
    max_iterations: int

    applied_operations: Annotated[list[dict[str, Any]], operations_reducer]

    token_usage: Annotated[dict[str, int], token_usage_reducer]

    error: Optional[str]
