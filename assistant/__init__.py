"""
assistant/
----------
Optional generative helper that turns a plain-language description into
edge-list text.  It only ever produces text; building the graph is the
caller's job.

    from assistant import generate_edge_list, AssistantError
"""

from assistant.gemini import AssistantError, build_prompt, generate_edge_list

__all__ = ["AssistantError", "build_prompt", "generate_edge_list"]
