"""
Prompt templates for the Gemini gateway.
"""

CHAT_SYSTEM_INSTRUCTION = (
    "You are a helpful travel assistant.\n"
    "FORMATTING: Use clear Markdown. Use bold for key locations. "
    "Use ### for headers. Use bullet points.\n"
    "TONE: Friendly, expert, and encouraging.\n"
    "CAPABILITY: You can see images if the user uploads them. "
    "Analyze food, signs, or landmarks in images."
)

BANNER_PROMPT = (
    "A beautiful, high-quality wide landscape photograph of {destination}. "
    "Aesthetic travel photography style, sunny day, cinematic lighting, "
    "no text, no people. 16:9 aspect ratio."
)

WEATHER_PROMPT = (
    "Get the current weather for {location}. Return a JSON object with: "
    "high (number), low (number), condition (string: e.g. Sunny, Cloudy, "
    "Rainy, Snowy), and city (string)."
)

TEXT_TRANSLATION_PROMPT = (
    'Translate this text from {source} to {target}: "{text}". '
    "Only return the translation."
)

VISION_TRANSLATION_PROMPT = (
    "You are a travel assistant. Detect all text in this image written in "
    "{source} and translate it to {target}. Only return the translated text. "
    'If there is no text, return "No text detected". Keep it concise.'
)

AUDIO_TRANSLATION_PROMPT = (
    "Transcribe and translate the speech in this audio from {source} to "
    "{target}. Only return the final translated text."
)


def render_template(template: str, **kwargs: str) -> str:
    """Render a template string, leaving unresolved vars as-is."""
    result = template
    for key, value in kwargs.items():
        result = result.replace(f"{{{key}}}", value)
    return result
