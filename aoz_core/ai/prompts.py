"""System prompts for AI task execution."""

BASE_SYSTEM_PROMPT = "You are an AI assistant helping with automated tasks."

AGENT_CONTEXT_TEMPLATE = """

You are working as part of "{agent_name}", a {agent_type} agent. Agent description: {agent_description}"""

TASK_INSTRUCTIONS = {
    "text_generation": (
        "Your task is to generate high-quality text based on the user's request. "
        "Be creative, accurate, and helpful."
    ),
    "analysis": (
        "Your task is to analyze the provided information and provide clear, actionable insights."
    ),
    "summarization": (
        "Your task is to create a concise, accurate summary of the provided content."
    ),
    "question_answer": (
        "Your task is to answer questions accurately and helpfully based on the information provided."
    ),
}

EMPTY_COMPLETION = "No response generated"
