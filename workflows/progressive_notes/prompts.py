"""Prompts for the five note layers.

Each layer builds on the one before it. Templates use str.format with
named fields; literal braces are doubled.
"""

FOCUS_LINE = "Read it with this lens in mind: {focus_area}.\n\n"

# Layer 1: keep what stands out, in the source's own words
CAPTURE_PROMPT = """You are taking first-pass notes on the content below.

{focus}Keep the passages that carry weight: surprising claims, useful explanations, memorable phrasing, data worth remembering. Quote or lightly trim the original wording rather than paraphrasing it. Drop filler, repetition and boilerplate.

Return markdown with one short heading per theme and the kept passages beneath each heading.

Title: {title}

Content:
{content}"""

# Layer 2: emphasis inside the captured notes
KEY_PASSAGES_PROMPT = """Below are first-pass notes on "{title}".

{focus}Return the notes unchanged except for emphasis: mark the most important sentences and phrases in **bold**. Bold roughly a fifth to a third of the text, choosing what a reader skimming only the bold parts would most need.

Notes:
{layer_1}"""

# Layer 3: compress to roughly a tenth of the source
DISTILL_PROMPT = """Distill the highlighted notes on "{title}" into their essential insights.

{focus}Aim for about {target_words} words in total. Use these sections:

## Core Concepts
The ideas everything else depends on, one bullet each.

## Key Findings
Claims, results or evidence worth keeping, one bullet each.

## Actionable Principles
What someone could do differently after reading this.

Highlighted notes:
{layer_2}"""

# Layer 4: short first-person summary
EXECUTIVE_SUMMARY_PROMPT = """Write an executive summary of "{title}" based on the distilled insights below.

{focus}Write in the first person, as notes to yourself, in no more than 250 words. Use these sections:

## The Big Idea
One or two sentences.

## What This Means
Why it matters and where it applies.

## Key Takeaways
Three to five bullets.

## Next Actions
Concrete steps to take.

Distilled insights:
{layer_3}"""

# Layer 5: a reusable artefact in the requested (or a suitable) format
CREATIVE_OUTPUT_PROMPT = """Turn the material below on "{title}" into something immediately usable.

{focus}{format_instruction}

Executive summary:
{layer_4}

Distilled insights:
{layer_3}"""

FORMAT_INSTRUCTION = "Produce it as: {output_format}."

AUTO_FORMAT_INSTRUCTION = """Choose the format that suits the material best:
- a checklist if it describes a procedure or habits to adopt
- a Mermaid diagram (in a ```mermaid block) if it describes a process, system or set of relationships
- a short practical guide if it teaches a skill
- a structured outline otherwise
Start with one line naming the format you chose."""


def focus_text(focus_area: str | None) -> str:
    return FOCUS_LINE.format(focus_area=focus_area) if focus_area else ""
