from typing import Any, Optional, Union

from langchain_core.messages import AIMessage, ToolMessage
from langgraph.graph import END, StateGraph

from resume_patch.agent.nodes import (
    call_llm_node,
    execute_tools_node,
    has_iterations_left,
    prepare_node,
    should_continue,
)
from resume_patch.agent.state import AgentState
from resume_patch.schema import ResumeData, dump_resume, validate_resume
from resume_patch.settings import get_settings


def create_graph() -> StateGraph:
    """
    Create the LangGraph for resume editing.

    Returns:
        The compiled graph ready to execute.
    """
    graph = StateGraph(AgentState)

    graph.add_node("prepare", prepare_node)
    graph.add_node("call_llm", call_llm_node)
    graph.add_node("execute_tools", execute_tools_node)

    graph.set_entry_point("prepare")

    graph.add_edge("prepare", "call_llm")

    graph.add_conditional_edges(
        "call_llm",
        should_continue,
        {
            "execute_tools": "execute_tools",
            "__end__": END,
        },
    )

    graph.add_conditional_edges(
        "execute_tools",
        has_iterations_left,
        {
            "call_llm": "call_llm",
            "__end__": END,
        },
    )

    return graph.compile()


def _message_text(message: AIMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def edit_resume(
    resume: Union[ResumeData, dict[str, Any]],
    instruction: str,
    max_iterations: Optional[int] = None,
) -> dict[str, Any]:
    """
    Edit a resume following a natural-language instruction.

    Args:
        resume: The resume to edit. It is never mutated.
        instruction: What to change, in the user's words.
        max_iterations: Maximum number of LLM calls. If None, uses
                        Settings.MAX_AGENT_ITERATIONS.

    Returns:
        A dictionary with:
        - "resume": The edited ``ResumeData``.
        - "applied_operations": Every committed operation, in order.
        - "reply": The model's final answer.
        - "token_usage": Accumulated token counters.
        - "error": Error message, if there is one.
    """
    settings = get_settings()

    if max_iterations is None:
        max_iterations = settings.MAX_AGENT_ITERATIONS

    tree = dump_resume(validate_resume(resume))
    app = create_graph()

    initial_state: AgentState = {
        "instruction": instruction,
        "resume": tree,
        "messages": [],
        "iteration_count": 0,
        "max_iterations": max_iterations,
        "applied_operations": [],
        "token_usage": {},
        "error": None,
    }

    final_state = app.invoke(initial_state, {"recursion_limit": 2 * max_iterations + 5})

    messages = final_state.get("messages", [])
    error = final_state.get("error")
    reply = ""
    if messages and isinstance(messages[-1], AIMessage):
        reply = _message_text(messages[-1])
    elif messages and isinstance(messages[-1], ToolMessage) and error is None:
        error = f"Stopped after {max_iterations} iterations without a final answer."

    return {
        "resume": validate_resume(final_state.get("resume", tree)),
        "applied_operations": final_state.get("applied_operations", []),
        "reply": reply,
        "token_usage": final_state.get("token_usage", {}),
        "error": error,
    }
