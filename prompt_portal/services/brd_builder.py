# prompt_portal/services/brd_builder.py
"""
Business Requirements Document assembly.

Every section is plain string interpolation over a BusinessAnalysis; there is no
failure mode once the analysis exists.
"""
from datetime import date
from typing import List

from prompt_portal.schemas.enhancement import BusinessAnalysis
from prompt_portal.services.text_analysis import split_sentences

BULLET = "•"
TITLE_MAX_LENGTH = 60
TITLE_KEYWORDS = ("system", "application", "platform")

STAKEHOLDER_ROLES = {
    "System Administrator": "Manages system configuration, user access, and technical maintenance",
    "End Users": "Primary users who interact with the system for daily business operations",
    "Management Team": "Provides strategic direction and approves business decisions",
    "Development Team": "Responsible for technical implementation and system development",
    "Finance Department": "Manages budget, financial approvals, and cost tracking",
    "HR Department": "Handles user onboarding, training, and organizational change management",
    "Sales & Marketing": "Utilizes system for customer engagement and business development",
    "Support Team": "Provides user support and issue resolution",
}
DEFAULT_STAKEHOLDER_ROLE = "Key stakeholder in the project implementation and success"

INTEGRATION_DETAILS = {
    "External APIs": "RESTful/SOAP interfaces with authentication, rate limiting, and versioning",
    "Database Systems": "Secure read/write access with connection pooling and transaction support",
    "Email Services": "Transactional email delivery with templates and delivery tracking",
    "Payment Gateways": "PCI-DSS compliant payment processing with refund and reconciliation support",
    "SMS Services": "Outbound SMS notifications with delivery status callbacks",
    "Cloud Services": "Managed cloud hosting, storage, and scaling capabilities",
    "Directory Services": "Centralized identity lookup and single sign-on via LDAP/Active Directory",
}
DEFAULT_INTEGRATION_DETAIL = "Standard integration using secure, documented interfaces"

# (response, throughput, availability, scalability) per complexity level
PERFORMANCE_REQUIREMENTS = {
    "High": {
        "response": "< 1 second for 95% of transactions",
        "throughput": "1,000+ concurrent users and 500+ transactions per second",
        "availability": "99.9% uptime with planned maintenance windows",
        "scalability": "Horizontal scaling to support 5x growth in users and data volume",
    },
    "Medium": {
        "response": "< 2 seconds for 95% of transactions",
        "throughput": "250+ concurrent users and 100+ transactions per second",
        "availability": "99.5% uptime during business hours",
        "scalability": "Support 3x growth in users and data volume",
    },
    "Low": {
        "response": "< 3 seconds for 95% of transactions",
        "throughput": "50+ concurrent users",
        "availability": "99% uptime during business hours",
        "scalability": "Support 2x growth in users and data volume",
    },
}


def bullets(items: List[str]) -> str:
    return "\n".join(f"{BULLET} {item}" for item in items)


def format_long_date(value: date) -> str:
    """Format like 'October 18, 2026'."""
    return f"{value:%B} {value.day}, {value.year}"


def derive_project_title(content: str, analysis: BusinessAnalysis) -> str:
    sentences = split_sentences(content)
    first_sentence = sentences[0] if sentences else analysis.project_type
    if len(first_sentence) > TITLE_MAX_LENGTH:
        title = first_sentence[:TITLE_MAX_LENGTH].strip() + "..."
    else:
        title = first_sentence.strip()

    title = title[:1].upper() + title[1:]
    if not any(keyword in title.lower() for keyword in TITLE_KEYWORDS):
        title += f" {analysis.project_type}"
    return title


def estimate_timeline(analysis: BusinessAnalysis) -> str:
    complexity, scope = analysis.complexity, analysis.scope
    if complexity == "High" and scope == "Large":
        return "6-12 months"
    if complexity == "High" or scope == "Large":
        return "4-8 months"
    if complexity == "Medium" and scope == "Medium":
        return "3-6 months"
    if complexity == "Medium" or scope == "Medium":
        return "2-4 months"
    return "1-3 months"


def business_need(content: str, analysis: BusinessAnalysis) -> str:
    business_context = ". ".join(split_sentences(content)[:3])
    return (
        f"The organization requires {analysis.project_type.lower()} to address current business "
        f"challenges and opportunities. {business_context}\n\n"
        f"This initiative aligns with strategic business objectives to achieve "
        f"{analysis.business_value.lower()} and enhance operational capabilities. The proposed "
        f"solution will serve as a critical enabler for business growth and competitive advantage."
    )


def current_state_analysis(analysis: BusinessAnalysis) -> str:
    challenges = [
        "Manual processes leading to inefficiencies and errors",
        "Limited visibility into business operations and performance",
        "Fragmented systems requiring better integration",
        "Growing user demands for improved digital experiences",
    ]
    opportunities = [
        "Automation potential to reduce operational costs by 20-30%",
        "Enhanced data analytics capabilities for better decision making",
        "Improved user satisfaction through streamlined processes",
        "Scalable architecture to support future business growth",
    ]
    return (
        f"**Current Challenges:**\n{bullets(challenges)}\n\n"
        f"**Opportunity Assessment:**\n{bullets(opportunities)}"
    )


def proposed_solution(analysis: BusinessAnalysis) -> str:
    mobile = (
        "Native mobile experience"
        if "Mobile" in analysis.project_type
        else "Responsive design for mobile access"
    )
    components = [
        "**Modern Architecture:** Scalable, secure, and maintainable system design",
        "**User-Centric Design:** Intuitive interfaces optimized for user productivity",
        "**Integration Capabilities:** Seamless connectivity with existing business systems",
        "**Advanced Analytics:** Real-time insights and reporting for data-driven decisions",
        f"**Mobile Accessibility:** {mobile}",
    ]
    return (
        f"The proposed {analysis.project_type.lower()} will provide a comprehensive solution "
        f"addressing identified business needs. Key solution components include:\n\n"
        f"{bullets(components)}"
    )


def in_scope_items(analysis: BusinessAnalysis) -> str:
    items = [
        f"{analysis.project_type} development and implementation",
        "User training and change management",
        "System testing and quality assurance",
        "Initial deployment and go-live support",
        "Documentation and user manuals",
    ]
    items += [f"{area} functionality" for area in analysis.functional_areas]
    items += [f"{integration} integration" for integration in analysis.integrations]
    return bullets(items)


def out_of_scope_items() -> str:
    return bullets([
        "Hardware procurement and infrastructure setup",
        "Legacy system decommissioning and data migration",
        "Third-party software licensing and ongoing maintenance",
        "Advanced AI/ML capabilities (future enhancement)",
        "Custom hardware or specialized equipment",
        "Ongoing operational support beyond warranty period",
    ])


def success_metrics(analysis: BusinessAnalysis) -> str:
    efficiency = (
        "20-30% cost reduction"
        if analysis.business_value == "Cost Reduction"
        else "25-40% improvement in process efficiency"
    )
    return bullets([
        "User adoption rate: >90% within 3 months of deployment",
        "System performance: Meeting all specified performance requirements",
        f"Business process efficiency: {efficiency}",
        "User satisfaction score: >4.0/5.0 in post-implementation surveys",
        "System availability: >99.5% uptime during business hours",
    ])


def stakeholder_section(analysis: BusinessAnalysis) -> str:
    primary = bullets([
        f"**{s}:** {STAKEHOLDER_ROLES.get(s, DEFAULT_STAKEHOLDER_ROLE)}" for s in analysis.stakeholders
    ])
    secondary = bullets([
        "**Quality Assurance Team:** Ensures system meets quality standards and testing requirements",
        "**Security Team:** Reviews and approves security implementations and protocols",
        "**Infrastructure Team:** Manages deployment environment and system resources",
        "**Business Analyst:** Facilitates requirements gathering and stakeholder communication",
    ])
    if analysis.integrations:
        external = bullets([
            f"**{i} Providers:** External service providers for system integration"
            for i in analysis.integrations
        ])
    else:
        external = bullets(["**Vendor Partners:** Third-party service providers as needed"])
    return (
        f"### Primary Stakeholders:\n{primary}\n\n"
        f"### Secondary Stakeholders:\n{secondary}\n\n"
        f"### External Stakeholders:\n{external}"
    )


def operational_focus(analysis: BusinessAnalysis) -> str:
    if "Reporting & Analytics" in analysis.functional_areas:
        return "data visibility and reporting accuracy"
    if analysis.integrations:
        return "cross-system data flow and process automation"
    return "process efficiency and data accuracy"


def ux_requirement(analysis: BusinessAnalysis) -> str:
    if "Mobile" in analysis.project_type:
        return "Deliver an intuitive, touch-optimized mobile experience"
    return "Deliver an intuitive, accessible interface that minimizes training needs"


def business_objectives(analysis: BusinessAnalysis) -> str:
    return "\n".join([
        f"1. **Primary Goal:** Deliver a comprehensive {analysis.project_type.lower()} "
        f"that enhances {analysis.business_value.lower()}",
        f"2. **Business Value Delivery:** {analysis.business_value}",
        f"3. **Operational Excellence:** Improve {operational_focus(analysis)}",
        f"4. **User Experience:** {ux_requirement(analysis)}",
        "5. **Scalability:** Support future growth and expansion requirements",
        "6. **Compliance:** Meet all relevant industry standards and regulations",
    ])


def kpis() -> str:
    return bullets([
        "System utilization: >85% user engagement",
        "Process efficiency: 30-50% improvement",
        "User satisfaction: >4.0/5.0 rating",
    ])


def functional_requirements(area: str) -> str:
    return bullets([
        f"Core functionality for {area}",
        "Data validation and processing",
        "User interface components",
        "Integration capabilities",
    ])


def functional_section(analysis: BusinessAnalysis) -> str:
    defaults = ["Core System Functions", "User Management", "Data Processing"]
    areas = list(analysis.functional_areas)
    headings = [areas[i] if i < len(areas) else defaults[i] for i in range(3)] + areas[3:]
    return "\n\n".join(f"### {area}:\n{functional_requirements(area)}" for area in headings)


def performance_section(analysis: BusinessAnalysis) -> str:
    levels = PERFORMANCE_REQUIREMENTS.get(analysis.complexity, PERFORMANCE_REQUIREMENTS["Low"])
    return bullets([
        f"**Response Time:** {levels['response']}",
        f"**Throughput:** {levels['throughput']}",
        f"**Availability:** {levels['availability']}",
        f"**Scalability:** {levels['scalability']}",
    ])


def security_requirements(analysis: BusinessAnalysis) -> str:
    items = [
        "Role-based access control for all system functions",
        "Encryption of sensitive data in transit (TLS 1.2+) and at rest",
        "Audit logging of user actions and administrative changes",
        "Regular vulnerability assessments and security patching",
    ]
    if "User Authentication" in analysis.functional_areas:
        items.append("Multi-factor authentication and secure password policies")
    if "Payment Processing" in analysis.functional_areas or "Payment Gateways" in analysis.integrations:
        items.append("PCI-DSS compliance for payment data handling")
    if analysis.business_value == "Regulatory Compliance":
        items.append("Data retention and privacy controls aligned with applicable regulations")
    return bullets(items)


def usability_requirements() -> str:
    return bullets([
        "Intuitive navigation requiring minimal training",
        "Accessibility compliance with WCAG 2.1 AA guidelines",
        "Consistent layout, terminology, and interaction patterns",
        "Contextual help and clear error messages",
    ])


def compatibility_requirements(analysis: BusinessAnalysis) -> str:
    items = [
        "Latest two versions of Chrome, Firefox, Safari, and Edge",
        "Responsive layouts for desktop, tablet, and mobile screen sizes",
    ]
    if "Mobile" in analysis.project_type:
        items.append("iOS 15+ and Android 10+ devices")
    if analysis.integrations:
        items.append("Backward-compatible interfaces for integrated systems")
    return bullets(items)


def assumptions() -> str:
    return bullets([
        "Stakeholders will be available for requirements validation and reviews",
        "Required infrastructure and environments will be provisioned on schedule",
        "Existing data is accessible and of sufficient quality for the solution",
        "Users will receive training before go-live",
    ])


def constraints(analysis: BusinessAnalysis) -> str:
    return bullets([
        f"Delivery timeline of {estimate_timeline(analysis)}",
        "Approved budget and resource allocation",
        "Compliance with organizational IT and security policies",
        "Compatibility with existing technology standards",
    ])


def dependencies(analysis: BusinessAnalysis) -> str:
    items = [f"Availability and readiness of {i}" for i in analysis.integrations]
    items += [
        "Timely stakeholder sign-off on requirements and designs",
        "Availability of test environments and test data",
    ]
    return bullets(items)


def workflow_steps(content: str, analysis: BusinessAnalysis) -> str:
    primary_area = analysis.functional_areas[0] if analysis.functional_areas else "Core Business Logic"
    steps = [
        "**Initiation:** User accesses the system and authenticates",
        f"**Input:** User provides information required for {primary_area.lower()}",
        "**Validation:** System validates input against business rules",
        "**Processing:** System executes the core business logic and updates records",
    ]
    if analysis.integrations:
        steps.append(f"**Integration:** System exchanges data with {', '.join(analysis.integrations)}")
    steps += [
        "**Notification:** Relevant stakeholders are notified of the outcome",
        "**Reporting:** Results are recorded and made available for reporting",
    ]
    return "\n".join(f"{i}. {step}" for i, step in enumerate(steps, start=1))


def exception_handling() -> str:
    return bullets([
        "Invalid input is rejected with clear, actionable error messages",
        "Failed integrations are retried and escalated after repeated failures",
        "System errors are logged and alert the support team",
        "Incomplete transactions are rolled back to maintain data integrity",
    ])


def decision_points(analysis: BusinessAnalysis) -> str:
    items = [
        "Is the user authorized to perform the requested action?",
        "Does the submitted data satisfy all validation rules?",
    ]
    if analysis.complexity != "Low":
        items.append("Does the request require approval before processing?")
    items.append("Should stakeholders be notified of the outcome?")
    return bullets(items)


def design_principles() -> str:
    return bullets([
        "Simplicity: Clean layouts focused on primary tasks",
        "Consistency: Shared components and visual language",
        "Feedback: Immediate confirmation of user actions",
        "Accessibility: Inclusive design for all users",
    ])


def ui_requirements(analysis: BusinessAnalysis) -> str:
    items = [
        "Role-based home screen with quick access to frequent tasks",
        "Search, filter, and sort on all list views",
        "Forms with inline validation",
    ]
    if "Reporting & Analytics" in analysis.functional_areas:
        items.append("Interactive dashboards with charts and export options")
    return bullets(items)


def ux_goals() -> str:
    return bullets([
        "Complete common tasks in three steps or fewer",
        "Reduce task completion time compared to the current process",
        "Achieve a user satisfaction score above 4.0/5.0",
    ])


def internal_integrations() -> str:
    return bullets([
        "**Identity Management:** Single sign-on with corporate identity provider",
        "**Reporting Systems:** Data feeds for enterprise reporting",
        "**Notification Services:** Internal email and messaging channels",
    ])


def external_integrations(analysis: BusinessAnalysis) -> str:
    if not analysis.integrations:
        return bullets(["**Standard Web Services:** Basic HTTP/REST API integrations as needed"])
    return bullets([
        f"**{i}:** {INTEGRATION_DETAILS.get(i, DEFAULT_INTEGRATION_DETAIL)}" for i in analysis.integrations
    ])


def data_exchange() -> str:
    return bullets([
        "JSON over HTTPS for real-time exchanges",
        "Scheduled batch exports in CSV format for reporting",
        "Data validation and error handling on all inbound data",
    ])


def testing_strategy(analysis: BusinessAnalysis) -> str:
    items = [
        "**Unit Testing:** Automated tests for all business logic",
        "**Integration Testing:** End-to-end verification of system interfaces",
        "**User Acceptance Testing:** Validation by business stakeholders",
    ]
    if analysis.complexity != "Low":
        items.append("**Performance Testing:** Load and stress testing against performance targets")
        items.append("**Security Testing:** Penetration testing and vulnerability scanning")
    return bullets(items)


def acceptance_criteria(analysis: BusinessAnalysis) -> str:
    items = [f"{area} works as specified" for area in analysis.functional_areas]
    items += [
        "All critical and high-severity defects are resolved",
        "Performance requirements are met under expected load",
        "Stakeholders sign off on user acceptance testing",
    ]
    return bullets(items)


def quality_gates() -> str:
    return bullets([
        "Requirements sign-off before development",
        "Code review and automated test coverage above 80%",
        "Successful UAT before production deployment",
    ])


def phase2_enhancements(analysis: BusinessAnalysis) -> str:
    items = ["Advanced analytics and predictive insights", "Workflow automation enhancements"]
    if "Mobile" not in analysis.project_type:
        items.append("Native mobile applications")
    items.append("Additional third-party integrations")
    return bullets(items)


def long_term_vision(analysis: BusinessAnalysis) -> str:
    return (
        f"Evolve the {analysis.project_type.lower()} into a strategic platform that drives "
        f"{analysis.business_value.lower()} across the organization and adapts to changing "
        f"business needs."
    )


def technology_evolution() -> str:
    return bullets([
        "AI/ML capabilities for automation and insights",
        "Cloud-native scalability and resilience",
        "API-first architecture for ecosystem integration",
    ])


def glossary(analysis: BusinessAnalysis) -> str:
    terms = [
        "**BRD:** Business Requirements Document",
        "**KPI:** Key Performance Indicator",
        "**UAT:** User Acceptance Testing",
        "**SLA:** Service Level Agreement",
    ]
    if analysis.integrations:
        terms.append("**API:** Application Programming Interface")
    return bullets(terms)


def build_brd(content: str, analysis: BusinessAnalysis, today: date) -> str:
    """Assemble the full Markdown BRD for the input text and its analysis."""
    return f"""# {derive_project_title(content, analysis)}

## Document Version
- **Version:** 1.0
- **Date:** {format_long_date(today)}
- **Prepared By:** AI Business Analyst
- **Document Status:** Draft
- **Project Complexity:** {analysis.complexity}
- **Estimated Timeline:** {estimate_timeline(analysis)}

## Purpose & Background

### Business Need
{business_need(content, analysis)}

### Current State Analysis
{current_state_analysis(analysis)}

### Proposed Solution
{proposed_solution(analysis)}

## Scope of the Requirement

### In-Scope:
{in_scope_items(analysis)}

### Out-of-Scope:
{out_of_scope_items()}

### Success Metrics
{success_metrics(analysis)}

## Stakeholders / Actors

{stakeholder_section(analysis)}

## Business Requirements

### Core Business Objectives:
{business_objectives(analysis)}

### Key Performance Indicators (KPIs):
{kpis()}

## Functional Requirements

{functional_section(analysis)}

## Non-Functional Requirements

### Performance Requirements:
{performance_section(analysis)}

### Security Requirements:
{security_requirements(analysis)}

### Usability Requirements:
{usability_requirements()}

### Compatibility Requirements:
{compatibility_requirements(analysis)}

## Assumptions and Constraints

### Assumptions:
{assumptions()}

### Constraints:
{constraints(analysis)}

### Dependencies:
{dependencies(analysis)}

## Workflow / Process Flow Diagram (Described in Steps)

### Primary Business Process:
{workflow_steps(content, analysis)}

### Exception Handling:
{exception_handling()}

### Decision Points:
{decision_points(analysis)}

## UI/UX Expectations

### Design Principles:
{design_principles()}

### User Interface Requirements:
{ui_requirements(analysis)}

### User Experience Goals:
{ux_goals()}

## Integration Requirements

### Internal Systems:
{internal_integrations()}

### External Systems:
{external_integrations(analysis)}

### Data Exchange:
{data_exchange()}

## Testing & Validation Criteria

### Testing Strategy:
{testing_strategy(analysis)}

### Acceptance Criteria:
{acceptance_criteria(analysis)}

### Quality Gates:
{quality_gates()}

## Future Enhancements (Optional)

### Phase 2 Roadmap:
{phase2_enhancements(analysis)}

### Long-term Vision:
{long_term_vision(analysis)}

### Technology Evolution:
{technology_evolution()}

## Glossary / Definitions

{glossary(analysis)}

---

**Document Classification:** {analysis.urgency} Priority | {analysis.complexity} Complexity | {analysis.scope} Scope

**Next Steps:**
1. Stakeholder review and approval of this BRD
2. Technical architecture design and planning
3. Project timeline and resource allocation
4. Development phase initiation

**Note:** This AI-generated BRD provides a comprehensive foundation based on the input provided. Please review, validate, and refine all sections with domain experts and stakeholders before proceeding with implementation."""
