"""
Note extraction prompt and tool schema.

Defines the instruction template for note taking and the single
`formatNotes` function the model is forced to call.

Dependencies: langchain_core.prompts
System role: Prompt template for note extraction
"""

from langchain_core.prompts import PromptTemplate

NOTES_TOOL_NAME = "formatNotes"

NOTES_TOOL_SCHEMA = {
    "name": NOTES_TOOL_NAME,
    "description": "Format the notes response",
    "parameters": {
        "type": "object",
        "properties": {
            "notes": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {
                            "type": "string",
                            "description": "The note",
                        },
                        "pageNumbers": {
                            "type": "array",
                            "items": {"type": "integer"},
                            "description": "The page number(s) of the note",
                        },
                    },
                    "required": ["text", "pageNumbers"],
                },
            },
        },
        "required": ["notes"],
    },
}

NOTES_TEMPLATE = """Take notes on the following scientific paper.
This is a technical paper outlining a computer science technique.
The goal is to be able to create a complete understanding of the paper after reading all notes.

Rules:
- Include specific quotes and details inside your notes.
- Respond with as many notes as it might take to cover the entire paper.
- Go into as much detail as you can, while keeping each note on a very specific part of the paper.
- Include notes about the results of any experiments the paper describes.
- Include notes about any steps to reproduce the results of the experiments.
- DO NOT respond with notes like: "The author discusses how well XYZ works.", instead explain what XYZ is and how it works.

Respond with a JSON array of objects with two keys: "text" and "pageNumbers".
"text" will be the specific note, and "pageNumbers" will be an array of the page numbers the note refers to (more than one if the note spans several pages).
Take a deep breath, and work your way through the paper step by step.

Paper: {paper}"""

NOTES_PROMPT = PromptTemplate.from_template(NOTES_TEMPLATE)
