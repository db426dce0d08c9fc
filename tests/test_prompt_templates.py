from prompt_portal.schemas.enhancement import PromptCategory
from prompt_portal.services.enhancement_service import EnhancementService
from prompt_portal.services.prompt_templates import build_enhanced_prompt

from tests.factories import FIXED_NOW


def test_code_generation_prompt_is_enhanced():
    service = EnhancementService(clock=lambda: FIXED_NOW)

    enhanced = service.enhance_prompt(
        "Create React Component",
        "Profile card",
        "Create a component that shows a user avatar",
    )

    assert enhanced.category == PromptCategory.CODE_GENERATION
    assert enhanced.title == "Code Generation Expert: Create React Component"
    assert enhanced.description.startswith("Profile card\n\n")
    assert "Create a component that shows a user avatar" in enhanced.content
    assert enhanced.improved_by_ai is True
    assert enhanced.ai_enhance_date == FIXED_NOW


def test_debugging_and_generic_prefixes():
    debug = build_enhanced_prompt(PromptCategory.DEBUGGING, "Login fails", "", "It crashes", FIXED_NOW)
    generic = build_enhanced_prompt(PromptCategory.GENERIC, "Poem", "", "About rain", FIXED_NOW)

    assert debug.title == "Debug & Troubleshooting Expert: Login fails"
    assert generic.title == "Enhanced: Poem"
    assert "About rain" in generic.content


def test_enhanced_prompt_serializes_with_ai_alias():
    enhanced = build_enhanced_prompt(PromptCategory.GENERIC, "Poem", "", "About rain", FIXED_NOW)
    data = enhanced.model_dump(by_alias=True)
    assert data["improvedByAI"] is True
    assert "aiEnhanceDate" in data


def test_enhancement_is_deterministic():
    service = EnhancementService(clock=lambda: FIXED_NOW)
    first = service.enhance_prompt("Summarize", "", "Summarize the meeting notes")
    second = service.enhance_prompt("Summarize", "", "Summarize the meeting notes")
    assert first == second
