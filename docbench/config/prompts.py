"""Default instruction prompts sent to the model.

The OCR prompt is fixed; the structured-note and agent-analysis prompts are
only defaults, callers may send their own instruction text.
"""

OCR_PROMPT = """\
You are a precise OCR transcription expert. Transcribe the text from the image word-for-word, including punctuation.
- If there are tables, output them as Markdown tables.
- Do not describe the image, only output the text found within it.
- Language: Detect automatically (English or Traditional Chinese)."""

STRUCTURED_NOTE_PROMPT = """\
You are an expert FDA regulatory document analyst. Analyze the following text and return a JSON object with the following structure:
{
    "formattedText": "Clean, well-structured Markdown version of the text with headers, bullets, etc.",
    "entities": "A Markdown table with columns: #, Entity, Context/Description. Extract top 20 key entities (Drugs, Organizations, Dates, Regulations).",
    "mindGraph": {
        "nodes": [{"id": "Concept1", "label": "Concept 1", "val": 10}, ...],
        "links": [{"source": "Concept1", "target": "Concept2", "value": 5}, ...]
    },
    "keywords": ["Key1", "Key2", "Key3", ...],
    "questions": "A list of 20 deep, exploratory follow-up questions based on the text."
}

Ensure the JSON is valid. For the mindGraph, extract 10-15 core concepts and their relationships. 'val' in nodes represents importance (5-20), 'value' in links represents strength (1-10).
"""

AGENT_ANALYSIS_PROMPT = """\
Please analyze the provided text.
1. Create a concise summary of the document.
2. Extract the top 20 most important entities (such as Drugs, Companies, Regulations, Dates, Medical Terms).
3. Present these entities in a Markdown table with the following columns: Entity, Type, Context/Description.

Ensure the output is in clean Markdown format.
"""

# Framing text wrapped around the caller's input for each call shape.
QNA_DOCUMENT_PREFIX = "You are a helpful assistant analyzing the following document:\n\n"
QNA_QUESTION_PREFIX = "Question: "
NOTE_TEXT_SEPARATOR = "\n\nTEXT TO ANALYZE:\n"
ANALYSIS_TEXT_PREFIX = "Document Text:\n"
ANALYSIS_INSTRUCTION_PREFIX = "Instruction:\n"
