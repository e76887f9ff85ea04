"""Image generation, editing and analysis tool declarations."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

IMAGE_STYLES = [
    "photo",
    "illustration",
    "diagram",
    "chart",
    "infographic",
    "artistic",
    "technical",
    "sketch",
    "watercolor",
    "3d_render",
]
ASPECT_RATIOS = ["1:1", "16:9", "9:16", "4:3", "3:4", "21:9", "square", "landscape", "portrait"]
ANALYSIS_TYPES = [
    "general",
    "detailed",
    "text_extraction",
    "diagram_interpretation",
    "chart_data",
    "accessibility",
    "technical",
    "artistic",
]

IMAGE_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="generate_image",
        description=(
            "Generate an image from a text description. Supports photos, illustrations, "
            "diagrams, charts and infographics."
        ),
        parameters=object_params(
            {
                "prompt": {
                    "type": "string",
                    "description": "Detailed description of the image to generate",
                },
                "style": {"type": "string", "enum": IMAGE_STYLES, "description": "Visual style"},
                "aspect_ratio": {
                    "type": "string",
                    "enum": ASPECT_RATIOS,
                    "description": "Aspect ratio of the output image",
                },
                "quality": {
                    "type": "string",
                    "enum": ["hd", "standard", "fast"],
                    "description": "Quality level; higher quality is slower",
                },
                "negative_prompt": {
                    "type": "string",
                    "description": "Things to avoid in the image",
                },
            },
            required=["prompt"],
        ),
    ),
    ToolSchema(
        name="edit_image",
        description="Edit an existing image following a natural-language instruction",
        parameters=object_params(
            {
                "image_url": {"type": "string", "description": "URL or data URI of the image"},
                "instruction": {"type": "string", "description": "What to change"},
                "preserve_style": {
                    "type": "boolean",
                    "description": "Keep the original style where possible",
                },
                "mask_description": {
                    "type": "string",
                    "description": "Which region of the image to edit",
                },
            },
            required=["image_url", "instruction"],
        ),
    ),
    ToolSchema(
        name="analyze_image",
        description="Analyze an image: describe it, extract text or interpret charts and diagrams",
        parameters=object_params(
            {
                "image_url": {"type": "string", "description": "URL or data URI of the image"},
                "analysis_type": {
                    "type": "string",
                    "enum": ANALYSIS_TYPES,
                    "description": "Kind of analysis to perform",
                },
                "questions": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Specific questions to answer about the image",
                },
                "extract_structured_data": {
                    "type": "boolean",
                    "description": "Return extracted data as structured JSON",
                },
            },
            required=["image_url"],
        ),
    ),
]
