"""Prompt templates for document analysis."""

from hyperread.models import ReadingMode

SYSTEM_PROMPT = (
    "You help a reader prepare to speed read a document. "
    "Answer only from the supplied text."
)

TECHNICAL_TEMPLATE = """Analyze the following technical paper/document.
Provide a structured brief to prepare a speed-reader.
1. summary: A concise abstract-style summary.
2. keyPoints: List the Hypothesis, Methodology, and Main Findings/Data.
3. estimatedReadingTime: Time to read at 200wpm (technical speed).

Text start:
"{text}..."
"""

NORMAL_TEMPLATE = """Analyze the following text which is from a book or document the user is about to speed read.
Provide a concise summary, a list of 3-5 key concepts they should look out for, and an estimated reading time if read at normal speed (300wpm).
Use the keys summary, keyPoints and estimatedReadingTime.

Text start:
"{text}..."
"""

QUESTION_TEMPLATE = """Document text:
"{text}..."

Question: {question}
"""

ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "keyPoints": {"type": "array", "items": {"type": "string"}},
        "estimatedReadingTime": {"type": "string"},
    },
    "required": ["summary", "keyPoints", "estimatedReadingTime"],
}


def analysis_prompt(text: str, mode: ReadingMode) -> str:
    template = TECHNICAL_TEMPLATE if mode is ReadingMode.TECHNICAL else NORMAL_TEMPLATE
    return template.format(text=text)


def question_prompt(text: str, question: str, mode: ReadingMode) -> str:
    prompt = QUESTION_TEMPLATE.format(text=text, question=question)
    if mode is ReadingMode.TECHNICAL:
        prompt += "Quote numbers, units and figure/table references exactly.\n"
    return prompt
