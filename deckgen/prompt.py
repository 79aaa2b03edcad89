from .config import MAX_PROMPT_CHARS
from .errors import InputError

title_instruction_block = """
Create a presentation about "{title}". Generate a JSON response with slides. Each slide should have a heading, 3-5 bullet points, and an image description. The first slide should be an introduction, and the last slide should be a conclusion. Make the content informative and professional.
"""

content_instruction_block = """
Analyze the following content and create a presentation based on it. Extract key information and organize it into a coherent presentation structure. Generate a JSON response with slides. Each slide should have a heading, 3-5 bullet points, and an image description.

Content to analyze:
{content}
"""

format_block = """
The JSON should follow this format:
{
  "slides": [
    {
      "heading": "Slide Title",
      "points": ["Point 1", "Point 2", "Point 3"],
      "imageDescription": "Brief description for image search"
    }
  ]
}

Keep image descriptions to 1-3 plain words that work well as stock photography searches (e.g. "teamwork", "solar panels").
Return only the JSON object, without markdown fences or commentary.
"""


def givePrompt(title="", content="", input_method="text"):
    title = (title or "").strip()
    content = content or ""

    if title and (input_method == "title" or not content.strip()):
        instruction = title_instruction_block.format(title=title)
    elif content.strip():
        instruction = content_instruction_block.format(content=content[:MAX_PROMPT_CHARS])
        if title:
            instruction += f"\nUse \"{title}\" as the presentation title.\n"
    else:
        raise InputError("Either title or content is required to build a prompt")

    return instruction + format_block
