import json
import logging
from typing import Any, Literal, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from resume_patch.agent.prompts import build_system_prompt, build_user_message
from resume_patch.agent.state import AgentState
from resume_patch.clients import get_tool_calling_model
from resume_patch.schema import dump_resume
from resume_patch.tools.patch_resume import patch_resume
from resume_patch.tools.read_value import read_value

logger = logging.getLogger(__name__)


def _extract_token_usage(*responses: BaseMessage) -> dict[str, int]:
    """Build a token_usage delta dict from one or more LLM responses."""
    usage: dict[str, int] = {
        "input_tokens": 0,
        "output_tokens": 0,
        "total_tokens": 0,
        "llm_calls": 0,
    }
    for resp in responses:
        usage["llm_calls"] += 1
        meta = getattr(resp, "usage_metadata", None)
        if not meta:
            continue
        usage["input_tokens"] += meta.get("input_tokens", 0)
        usage["output_tokens"] += meta.get("output_tokens", 0)
        usage["total_tokens"] += meta.get("total_tokens", 0)
    return usage


def _last_ai_message(messages: list[BaseMessage]) -> Optional[AIMessage]:
    for msg in reversed(messages):
        if isinstance(msg, AIMessage):
            return msg
    return None


def prepare_node(state: AgentState) -> dict[str, Any]:
    """
    Node that opens the conversation.

    The system prompt embeds the resume as it is now, so the model can
    address existing items by index without a read first.
    """
    return {
        "messages": [
            SystemMessage(content=build_system_prompt(state.get("resume", {}))),
            HumanMessage(content=build_user_message(state.get("instruction", ""))),
        ],
        "iteration_count": 0,
    }


def call_llm_node(state: AgentState) -> dict[str, Any]:
    """
    Node that calls the LLM with the resume tools bound.

    Args:
        state: Current state of the agent.

    Returns:
        Updates to the state with the LLM response.
    """
    llm = get_tool_calling_model()
    response = llm.invoke(state.get("messages", []))
    return {
        "messages": [response],
        "iteration_count": state.get("iteration_count", 0) + 1,
        "token_usage": _extract_token_usage(response),
    }


def _dispatch_tool(
    name: str, args: dict[str, Any], resume: dict[str, Any]
) -> tuple[dict[str, Any], dict[str, Any], list[dict[str, Any]]]:
    """Run one tool call. Returns (payload, resume after the call, committed operations)."""
    if name == "patch_resume":
        result = patch_resume(resume, args.get("operations"))
        if not result.success:
            return result.to_tool_output(), resume, []
        return result.to_tool_output(), dump_resume(result.data), result.applied_operations

    if name == "read_resume":
        return read_value(resume, {"path": args.get("path", "")}), resume, []

    raise KeyError(f"Unknown tool: {name}")


def execute_tools_node(state: AgentState) -> dict[str, Any]:
    """
    Node that executes the tool calls from the LLM response.

    Tool calls run in order against the resume as left by the previous
    call. A rejected batch is reported back to the model with its error
    code, operation index and path so it can correct itself.

    Args:
        state: Current state of the agent.

    Returns:
        Updates to the state with tool results, the resume and the
        committed operations.
    """
    last_message = _last_ai_message(state.get("messages", []))
    if last_message is None:
        return {"error": "No LLM response found."}

    tool_calls = getattr(last_message, "tool_calls", None) or []
    resume = state.get("resume", {})
    committed: list[dict[str, Any]] = []
    tool_messages: list[ToolMessage] = []

    for tc in tool_calls:
        name = tc["name"]
        args = tc.get("args") or {}
        call_id = tc["id"]

        try:
            payload, resume, applied = _dispatch_tool(name, args, resume)
            committed.extend(applied)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Tool '%s' raised %s: %s", name, type(exc).__name__, exc)
            payload = {"success": False, "error": {"kind": type(exc).__name__, "message": str(exc)}}

        tool_messages.append(
            ToolMessage(
                content=json.dumps(payload, ensure_ascii=False, default=str),
                tool_call_id=call_id,
            )
        )

    return {
        "messages": tool_messages,
        "resume": resume,
        "applied_operations": committed,
    }


def should_continue(state: AgentState) -> Literal["execute_tools", "__end__"]:
    """Route after the LLM: run tools if it asked for any, else stop."""
    if state.get("error"):
        return "__end__"
    last_message = _last_ai_message(state.get("messages", []))
    if last_message is not None and getattr(last_message, "tool_calls", None):
        return "execute_tools"
    return "__end__"


def has_iterations_left(state: AgentState) -> Literal["call_llm", "__end__"]:
    """Route after tools: give the model another turn while budget remains."""
    if state.get("error"):
        return "__end__"
    if state.get("iteration_count", 0) >= state.get("max_iterations", 1):
        logger.warning(
            "Agent reached max iterations (%d) before answering",
            state.get("max_iterations", 1),
        )
        return "__end__"
    return "call_llm"
