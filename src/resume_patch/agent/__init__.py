from resume_patch.agent.graph import create_graph, edit_resume

__all__ = ["create_graph", "edit_resume"]
