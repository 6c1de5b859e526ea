from typing import Dict

# USD per 1K tokens; whisper-1 is billed per audio minute and passed as prompt_tokens
MODEL_PRICING: Dict[str, Dict[str, float]] = {
    "gpt-4o": {"input": 0.0025, "output": 0.01},
    "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
    "whisper-1": {"input": 0.006, "output": 0.0},
}


def estimate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    """Estimate the USD cost of a request. Unknown models cost nothing."""
    rates = MODEL_PRICING.get(model, {"input": 0.0, "output": 0.0})
    return (prompt_tokens / 1000) * rates["input"] + (completion_tokens / 1000) * rates["output"]
