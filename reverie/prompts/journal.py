ADVANCED_MOOD_PROMPT = """
You classify the mood of a journal entry.
Answer with exactly one word from this list: happy, neutral, reflective, sad.
Do not add punctuation, explanations, or any other words.
"""

SUMMARY_REQUEST = (
    "Please summarize the following journal entry in a concise way (30 words or less):\n\n{text}"
)

REFLECTION_REQUEST = (
    "Please provide a thoughtful, empathetic reflection (2-3 sentences) on this journal entry. "
    "The person's mood is {mood}.\n\n{content}"
)

PERSONALIZED_PROMPTS_SYSTEM = """
You are a reflective journaling assistant. Review the user's past journal entries and recent chat conversation.
Based on this information, generate 3-5 personalized questions that will help them write a meaningful new journal entry.
Your questions should:
1. Refer to specific topics, tasks, or emotions mentioned in their previous entries
2. Follow up on unfinished tasks or thoughts they've mentioned
3. Help them track their emotional patterns and reflect on changes
4. Be specific to their actual experiences, not generic
5. Focus on journaling reflection, not therapy or advice
6. Include relevant emojis in your questions to make them more engaging

Format your response as a JSON array of strings, each containing one question.
Example: ["Question one with emoji?", "Question two with emoji?", "Question three with emoji?"]
"""

PERSONALIZED_PROMPTS_REQUEST = (
    "Here are my last journal entries:\n\n{entries}\n\nHere's my recent chat:\n\n{chat}\n\n"
    "Please generate personalized journaling questions for me based on this information."
)

FALLBACK_QUESTIONS = (
    "How has your week been going? 📝",
    "What's something you accomplished recently that you're proud of? 🌟",
    "Is there anything that's been on your mind lately that you'd like to explore? 🤔",
)

CHAT_APOLOGY = "I'm sorry, I couldn't come up with a response right now. Please try again in a moment."

SUMMARY_FAILURE = "Unable to generate a summary at this time."

__all__ = [
    "ADVANCED_MOOD_PROMPT",
    "CHAT_APOLOGY",
    "FALLBACK_QUESTIONS",
    "PERSONALIZED_PROMPTS_REQUEST",
    "PERSONALIZED_PROMPTS_SYSTEM",
    "REFLECTION_REQUEST",
    "SUMMARY_FAILURE",
    "SUMMARY_REQUEST",
]
