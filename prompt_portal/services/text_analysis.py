# prompt_portal/services/text_analysis.py
"""
Keyword rule tables and classifiers for the enhancement utilities.

Every classifier lower-cases its input and tests plain substring containment
against ordered rule tables. No randomness and no weighting: a rule either
matches or it does not, and table order decides which match wins.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from prompt_portal.schemas.enhancement import BusinessAnalysis, EmailSignals, PromptCategory


@dataclass(frozen=True)
class KeywordRule:
    """A label that applies when any of its keywords occurs in the text."""
    label: str
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class RuleTable:
    """Ordered rules with a fallback used when nothing matches."""
    name: str
    version: int
    rules: Tuple[KeywordRule, ...]
    default: Optional[str] = None
    default_labels: Tuple[str, ...] = ()

    def first_match(self, *texts: str) -> Optional[str]:
        for rule in self.rules:
            if any(rule.matches(text) for text in texts):
                return rule.label
        return self.default

    def all_matches(self, *texts: str) -> List[str]:
        labels = [rule.label for rule in self.rules if any(rule.matches(text) for text in texts)]
        return labels or list(self.default_labels)


# ==========================================================
# Prompt enhancement
# ==========================================================

PROMPT_CATEGORY_RULES = RuleTable(
    name="prompt_category",
    version=1,
    rules=(
        KeywordRule(PromptCategory.CODE_GENERATION.value, (
            "code", "function", "component", "api", "class", "method", "algorithm",
            "script", "program", "create", "build", "develop",
        )),
        KeywordRule(PromptCategory.DEBUGGING.value, (
            "debug", "fix", "error", "bug", "issue", "problem", "troubleshoot",
        )),
    ),
    default=PromptCategory.GENERIC.value,
)


def classify_prompt(title: str, content: str) -> PromptCategory:
    """Code generation is checked before debugging; anything else is generic."""
    label = PROMPT_CATEGORY_RULES.first_match(title.lower(), content.lower())
    return PromptCategory(label)


# ==========================================================
# Business requirements (BRD) analysis
# ==========================================================

PROJECT_TYPE_RULES = RuleTable(
    name="project_type",
    version=1,
    rules=(
        KeywordRule("Mobile Application", ("mobile", "app", "ios", "android")),
        KeywordRule("Web Application", ("web", "website", "portal")),
        KeywordRule("System Integration", ("integration", "api", "connect")),
        KeywordRule("Analytics Platform", ("dashboard", "analytics", "report")),
        KeywordRule("E-commerce Solution", ("ecommerce", "shopping", "payment")),
        KeywordRule("CRM System", ("crm", "customer")),
        KeywordRule("Inventory Management", ("inventory", "warehouse", "stock")),
    ),
    default="Business Application",
)

COMPLEXITY_INDICATORS: Tuple[str, ...] = (
    "integration", "api", "database", "security", "authentication", "authorization",
    "workflow", "approval", "notification", "reporting", "analytics", "dashboard",
    "mobile", "responsive", "scalability", "performance", "compliance", "audit",
)
HIGH_COMPLEXITY_SCORE = 10
MEDIUM_COMPLEXITY_SCORE = 5

STAKEHOLDER_RULES = RuleTable(
    name="stakeholders",
    version=1,
    rules=(
        KeywordRule("System Administrator", ("admin", "administrator")),
        KeywordRule("End Users", ("user", "customer", "client")),
        KeywordRule("Management Team", ("manager", "supervisor")),
        KeywordRule("Development Team", ("developer", "technical")),
        KeywordRule("Finance Department", ("finance", "accounting")),
        KeywordRule("HR Department", ("hr", "human resource")),
        KeywordRule("Sales & Marketing", ("sales", "marketing")),
        KeywordRule("Support Team", ("support", "helpdesk")),
    ),
    default_labels=("Business Users", "System Administrator", "Project Manager"),
)

FUNCTIONAL_AREA_RULES = RuleTable(
    name="functional_areas",
    version=1,
    rules=(
        KeywordRule("User Authentication", ("login", "auth", "password")),
        KeywordRule("Reporting & Analytics", ("report", "analytics", "dashboard")),
        KeywordRule("Notifications", ("notification", "alert", "email")),
        KeywordRule("Payment Processing", ("payment", "transaction", "billing")),
        KeywordRule("Inventory Management", ("inventory", "stock", "product")),
        KeywordRule("Order Management", ("order", "purchase", "cart")),
        KeywordRule("Customer Management", ("customer", "client", "contact")),
        KeywordRule("Document Management", ("document", "file", "upload")),
    ),
    default_labels=("Core Business Logic", "User Management", "Data Processing"),
)

INTEGRATION_RULES = RuleTable(
    name="integrations",
    version=1,
    rules=(
        KeywordRule("External APIs", ("api", "rest", "soap")),
        KeywordRule("Database Systems", ("database", "sql", "mongodb")),
        KeywordRule("Email Services", ("email", "smtp")),
        KeywordRule("Payment Gateways", ("payment", "stripe", "paypal")),
        KeywordRule("SMS Services", ("sms", "twilio")),
        KeywordRule("Cloud Services", ("cloud", "aws", "azure")),
        KeywordRule("Directory Services", ("ldap", "active directory")),
    ),
)

BUSINESS_VALUE_RULES = RuleTable(
    name="business_value",
    version=1,
    rules=(
        KeywordRule("Cost Reduction", ("cost", "save", "reduce")),
        KeywordRule("Operational Efficiency", ("efficiency", "automate", "streamline")),
        KeywordRule("Customer Experience", ("customer", "satisfaction", "experience")),
        KeywordRule("Revenue Growth", ("revenue", "sales", "profit")),
        KeywordRule("Regulatory Compliance", ("compliance", "regulation", "audit")),
    ),
    default="Business Process Improvement",
)

URGENCY_RULES = RuleTable(
    name="urgency",
    version=1,
    rules=(
        KeywordRule("High", ("urgent", "critical", "asap")),
        KeywordRule("Medium", ("soon", "priority", "important")),
    ),
    default="Normal",
)

LARGE_SCOPE_WORDS = 200
MEDIUM_SCOPE_WORDS = 100


def detect_project_type(text: str) -> str:
    return PROJECT_TYPE_RULES.first_match(text)


def assess_complexity(text: str) -> str:
    score = sum(1 for indicator in COMPLEXITY_INDICATORS if indicator in text)
    if score >= HIGH_COMPLEXITY_SCORE:
        return "High"
    if score >= MEDIUM_COMPLEXITY_SCORE:
        return "Medium"
    return "Low"


def determine_scope(text: str) -> str:
    word_count = len(text.split(" "))
    if word_count > LARGE_SCOPE_WORDS:
        return "Large"
    if word_count > MEDIUM_SCOPE_WORDS:
        return "Medium"
    return "Small"


def analyze_business_content(content: str) -> BusinessAnalysis:
    text = content.lower()
    return BusinessAnalysis(
        project_type=detect_project_type(text),
        complexity=assess_complexity(text),
        stakeholders=STAKEHOLDER_RULES.all_matches(text),
        functional_areas=FUNCTIONAL_AREA_RULES.all_matches(text),
        integrations=INTEGRATION_RULES.all_matches(text),
        business_value=BUSINESS_VALUE_RULES.first_match(text),
        urgency=URGENCY_RULES.first_match(text),
        scope=determine_scope(text),
    )


# ==========================================================
# Email rewriting
# ==========================================================

URGENT_EMAIL = KeywordRule("urgent", (
    "urgent", "asap", "as soon as possible", "immediately", "critical", "deadline", "right away",
))
REQUEST_EMAIL = KeywordRule("request", (
    "please", "could you", "can you", "would you", "request", "need you to", "would like",
))
FOLLOW_UP_EMAIL = KeywordRule("follow_up", (
    "follow up", "following up", "follow-up", "checking in", "reminder", "circling back",
    "haven't heard", "have not heard",
))
THANK_YOU_EMAIL = KeywordRule("thank_you", ("thank", "appreciate", "grateful"))
MEETING_EMAIL = KeywordRule("meeting", (
    "meeting", "schedule", "call", "calendar", "availability", "catch up", "discuss",
))
FORMAL_EMAIL = KeywordRule("formal_context", (
    "dear", "regarding", "client", "proposal", "contract", "management", "sir", "madam",
    "kindly", "invoice",
))
FORMAL_WORD_COUNT = 80


def analyze_email(content: str) -> EmailSignals:
    text = content.lower()
    return EmailSignals(
        urgent=URGENT_EMAIL.matches(text),
        request=REQUEST_EMAIL.matches(text),
        follow_up=FOLLOW_UP_EMAIL.matches(text),
        thank_you=THANK_YOU_EMAIL.matches(text),
        meeting=MEETING_EMAIL.matches(text),
        formal_context=FORMAL_EMAIL.matches(text) or len(text.split()) > FORMAL_WORD_COUNT,
    )


def split_sentences(content: str) -> List[str]:
    """Split on sentence punctuation and newlines, dropping blank fragments."""
    return [s for s in re.split(r"[.!?\n]+", content) if s.strip()]
