# prompt_portal/services/email_builder.py
"""
Templated email rewriting.

Classification happens upstream (``analyze_email``); this module only picks a
subject, greeting, transition and sign-off from fixed pools using the random
source it is given, so a seeded ``random.Random`` makes the output reproducible.
"""
import random
import re
from typing import List, Optional

from prompt_portal.schemas.enhancement import EmailSignals, RewrittenEmail

SUBJECT_POOLS = {
    "urgent": [
        "Urgent: Action Required",
        "Time-Sensitive Request",
        "Urgent Matter Requiring Your Attention",
    ],
    "meeting": [
        "Meeting Request",
        "Scheduling a Time to Connect",
        "Request to Schedule a Discussion",
    ],
    "follow_up": [
        "Following Up on Our Previous Conversation",
        "Quick Follow-Up",
        "Checking In on Next Steps",
    ],
    "request": [
        "Request for Your Assistance",
        "Quick Request",
        "Seeking Your Support",
    ],
    "thank_you": [
        "Thank You",
        "With Appreciation",
        "Thank You for Your Support",
    ],
    "general": [
        "Quick Update",
        "Sharing an Update",
        "Update and Next Steps",
    ],
}

# Intent priority when several signals are present
INTENT_ORDER = ("urgent", "meeting", "follow_up", "request", "thank_you")

OPENING_LINES = {
    "urgent": "I am reaching out regarding a time-sensitive matter that requires your attention.",
    "meeting": "I would like to arrange a time to discuss the following.",
    "follow_up": "I wanted to follow up on my previous message.",
    "request": "I am writing to ask for your help with the following.",
    "thank_you": "I wanted to take a moment to express my appreciation.",
    "general": "I hope this message finds you well.",
}

CALLS_TO_ACTION = {
    "urgent": "I would appreciate your response at your earliest convenience.",
    "meeting": "Please let me know what time works best for you.",
    "follow_up": "I look forward to hearing from you.",
    "request": "Please let me know if you have any questions.",
    "thank_you": "Thank you again for your time and support.",
    "general": "Please let me know if you have any questions.",
}

FORMAL_GREETINGS = ["Dear {name},", "Good day {name},", "Hello {name},"]
CASUAL_GREETINGS = ["Hi {name},", "Hello {name},", "Hey {name},"]

TRANSITIONS = ["Additionally,", "Furthermore,", "In addition,", "Also,"]

FORMAL_CLOSINGS = ["Best regards,", "Kind regards,", "Sincerely,"]
GRATEFUL_CLOSINGS = ["With gratitude,", "Many thanks,", "Warm regards,"]
CASUAL_CLOSINGS = ["Best,", "Thanks,", "Cheers,"]

DEFAULT_SENDER = "[Your Name]"

SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+|\n+")


def primary_intent(signals: EmailSignals) -> str:
    for intent in INTENT_ORDER:
        if getattr(signals, intent):
            return intent
    return "general"


def clean_sentences(content: str) -> List[str]:
    """Split into sentences, collapse whitespace, capitalize and terminate each one.

    Sentences end at terminal punctuation followed by whitespace, or at a line
    break, so addresses and decimals stay intact.
    """
    sentences = []
    for fragment in SENTENCE_BREAK.split(content):
        sentence = " ".join(fragment.split())
        if not sentence or not any(ch.isalnum() for ch in sentence):
            continue
        sentence = sentence[0].upper() + sentence[1:]
        if sentence[-1] not in ".!?":
            sentence += "."
        sentences.append(sentence)
    return sentences


def _lower_first(sentence: str) -> str:
    # keep acronyms, "I" and its contractions intact
    first_word = sentence.split(" ", 1)[0]
    stem = re.split(r"['’]", first_word.rstrip(".,!?"), maxsplit=1)[0]
    if first_word.isupper() or stem == "I":
        return sentence
    return sentence[0].lower() + sentence[1:]


def build_email(
    content: str,
    signals: EmailSignals,
    rng: random.Random,
    recipient_name: Optional[str] = None,
    sender_name: Optional[str] = None,
) -> RewrittenEmail:
    intent = primary_intent(signals)

    subject = rng.choice(SUBJECT_POOLS[intent])

    greetings = FORMAL_GREETINGS if signals.formal_context else CASUAL_GREETINGS
    name = recipient_name or ("Team" if signals.formal_context else "there")
    greeting = rng.choice(greetings).format(name=name)

    sentences = clean_sentences(content)
    transition = rng.choice(TRANSITIONS)
    if len(sentences) > 1:
        sentences[1] = f"{transition} {_lower_first(sentences[1])}"
    message = " ".join(sentences)

    if signals.thank_you:
        closings = GRATEFUL_CLOSINGS
    elif signals.formal_context:
        closings = FORMAL_CLOSINGS
    else:
        closings = CASUAL_CLOSINGS
    closing = rng.choice(closings)

    body = "\n\n".join([
        greeting,
        OPENING_LINES[intent],
        message,
        CALLS_TO_ACTION[intent],
        f"{closing}\n{sender_name or DEFAULT_SENDER}",
    ])
    return RewrittenEmail(subject=subject, body=body, signals=signals)
