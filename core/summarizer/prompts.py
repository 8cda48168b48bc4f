# Prompt and call limits used by the log summarizer.


SUMMARIZE_MAX_TOKENS = 512


SUMMARIZE_SYSTEM_PROMPT = (
    "You are a memory compressor for an NPC in a 2D game. "
    "Given a series of chronological log entries, produce a single concise "
    "narrative paragraph that preserves key facts, decisions, spatial "
    "observations, and interactions. Drop trivial or redundant details. "
    "Write in third person past tense."
)
