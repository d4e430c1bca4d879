"""
prompt.py
=========
Plain-text prompt framing for the local generative model.

The model continues plain text, so role-following relies on four labelled
sections: instruction, "Context:", "User:" and a trailing "Assistant:" cue.
"""

from __future__ import annotations

from typing import Sequence

NO_CONTEXT = "(no context available)"

SYSTEM_INSTRUCTION = (
    "You are a friendly plant care assistant for a plant care website. "
    "Use the provided context about plants, climates, common problems and care guides "
    "to answer the user's question. If the answer is not in the context, say so and "
    "suggest the Plants, Weather or country pages of the site instead. "
    "Keep responses concise."
)

_PROMPT_TEMPLATE = "{instruction}\n\nContext:\n{context}\n\nUser: {message}\nAssistant:"


def join_context(chunks: Sequence[str]) -> str:
    return "\n\n".join(chunk for chunk in chunks if chunk)


def assemble(system_instruction: str, context: str, user_message: str) -> str:
    return _PROMPT_TEMPLATE.format(
        instruction = system_instruction,
        context     = context or NO_CONTEXT,
        message     = user_message,
    )
