"""
Built-in Co-Build framework curriculum.

Seven stages, assets numbered 1-27 (#14 was retired and is intentionally absent).
Only the fields the guidance engine and its callers need are kept here.
"""

from typing import Any, Dict, List

COBUILD_STAGES: List[Dict[str, Any]] = [
    {
        "id": "00",
        "number": "00",
        "title": "The Invention Gate",
        "subtitle": "Why this market won't solve itself",
        "description": (
            "The Invention Gate is where every Co-Build journey begins. Before you write a single "
            "line of code or speak to a single customer, you must answer the most fundamental "
            "question: why does this venture need to exist?"
        ),
        "gate_decision": (
            "Only proceed to Stage 01 if both assets are complete and pass the world-beating test."
        ),
        "assets": [
            {
                "number": 1,
                "title": "Risk Capital + Invention One-Pager",
                "purpose": (
                    "True risk-capital logic: why the market won't solve this, what must be "
                    "invented, and why insiders can win globally."
                ),
            },
            {
                "number": 2,
                "title": "Category Ambition Gate",
                "purpose": (
                    'Forces category clarity: "if we win, what global category do we own?" '
                    "Filters out small tools and pilotware early."
                ),
            },
        ],
    },
    {
        "id": "01",
        "number": "01",
        "title": "Problem Deep Dive",
        "subtitle": "Quantifying pain that funds solutions",
        "description": (
            "Now that you've passed the Invention Gate, it's time to deeply understand the problem "
            "you're solving. This stage forces economic truth."
        ),
        "gate_decision": (
            "Proceed to Stage 02 once you can quantify the pain and map where AI creates value."
        ),
        "assets": [
            {
                "number": 3,
                "title": "Problem Deep Dive + Quantification",
                "purpose": (
                    "Economic truth: pain, cost, frequency, who pays, and how it's measured. "
                    "This defines target outcomes."
                ),
                "feeds_into": (
                    "Eval targets (#10) → ROI/pricing (#19/#21) → Pilot KPIs (#18) → PRD metrics (#15)"
                ),
            },
            {
                "number": 4,
                "title": "Workflow Map + Data Touchpoints",
                "purpose": (
                    "Maps decisions and actions + where data is created/owned + where AI "
                    "intervenes. This is NOT about chatbots."
                ),
            },
        ],
    },
    {
        "id": "02",
        "number": "02",
        "title": "Customer & Validation",
        "subtitle": "ICP, assumptions, and kill switches",
        "description": (
            "Now you know the problem. This stage forces you to define exactly who you're solving "
            "it for, what you're assuming, and what evidence would kill this venture."
        ),
        "gate_decision": (
            "Proceed to Stage 03 only if your core assumptions survive discovery. If a kill switch "
            "triggers — pivot or stop."
        ),
        "assets": [
            {
                "number": 5,
                "title": "ICP Definition",
                "purpose": (
                    "Define your Ideal Customer Profile with precision. Who is the buyer, who is "
                    "the user, and what does their world look like?"
                ),
            },
            {
                "number": 6,
                "title": "Assumptions + Kill Switches",
                "purpose": (
                    "Every venture is built on assumptions. This asset forces you to name them "
                    "explicitly and define what evidence would kill the venture."
                ),
            },
            {
                "number": 7,
                "title": "Discovery Interviews",
                "purpose": (
                    "Structured customer discovery to validate or invalidate your assumptions. "
                    "Not sales calls — learning calls."
                ),
            },
        ],
    },
    {
        "id": "03",
        "number": "03",
        "title": "Data Rights & AI Feasibility",
        "subtitle": "The moat isn't the model — it's the data contract",
        "description": (
            "This is where most AI ventures fail silently. You must prove the AI can work AND "
            "secure the data rights that make your moat real."
        ),
        "gate_decision": (
            "Proceed to Stage 04 only when you have signed data advantage contracts and proven AI "
            "feasibility."
        ),
        "assets": [
            {
                "number": 8,
                "title": "Design Partner Pipeline",
                "purpose": (
                    "Ensures selling while validating; selects accounts most likely to fund pilots."
                ),
            },
            {
                "number": 9,
                "title": "AI Feasibility Brief",
                "purpose": (
                    "Decides: rules/ML/LLM-RAG/agents; what's automatable now vs. human-in-loop."
                ),
            },
            {
                "number": 10,
                "title": "Eval Plan + Ground Truth",
                "purpose": "Defines 'good': gold set, scoring, acceptance thresholds, failure modes.",
            },
            {
                "number": 11,
                "title": "Security Pack",
                "purpose": "The data unblocker. Without this, enterprise deals stall.",
            },
            {
                "number": 12,
                "title": "Data Advantage Contract",
                "purpose": (
                    'Makes "data moat" contractual, not assumed. Without this, you have no moat.'
                ),
            },
            {
                "number": 13,
                "title": "The Moat Ledger",
                "purpose": (
                    "Tracks compounding loops with evidence. The moat isn't theoretical — "
                    "it's documented."
                ),
            },
        ],
    },
    {
        "id": "04",
        "number": "04",
        "title": "The PRD Culmination",
        "subtitle": "Everything converges into what we build",
        "description": (
            "This is the fulcrum of the entire framework. Everything before this stage feeds into "
            "the PRD. Everything after flows from it."
        ),
        "gate_decision": (
            "The PRD is your contract with reality. Only proceed to Build once all stakeholders "
            "have signed off."
        ),
        "assets": [
            {
                "number": 15,
                "title": "PRD v1 + Not-to-Build",
                "purpose": (
                    "Dual PRD: workflow requirements + intelligence requirements. Explicit exclusions."
                ),
            },
        ],
    },
    {
        "id": "05",
        "number": "05",
        "title": "Build & Sell",
        "subtitle": "Architecture, LOI, pilot, prototype",
        "description": (
            "Now you build — but you sell simultaneously. The build and sell tracks run in "
            "parallel, not in sequence."
        ),
        "gate_decision": (
            "Proceed to Scale only with a signed LOI, live pilot, and prototype that meets eval "
            "thresholds."
        ),
        "assets": [
            {
                "number": 16,
                "title": "Enterprise Architecture Canvas",
                "purpose": "Technical architecture for enterprise-grade AI product.",
            },
            {
                "number": 17,
                "title": "Design Partner Offer + LOI",
                "purpose": "Secures paid pilot with AI + data + productization clauses.",
            },
            {
                "number": 18,
                "title": "Pilot SOW + KPI Dashboard",
                "purpose": "The pilot SOW is where ventures die or scale.",
            },
            {
                "number": 19,
                "title": "Prototype Sprint + Demo",
                "purpose": "Shows workflow value + eval proof + safety controls + latency/cost.",
            },
        ],
    },
    {
        "id": "06",
        "number": "06",
        "title": "Scale & Spinout",
        "subtitle": "Sales pack, pricing, roadmap, and exit",
        "description": "You've built it, proved it works. Now scale it into a standalone company.",
        "gate_decision": (
            "Congratulations — you've completed all 27 assets of the Co-Build Framework. Your "
            "venture is ready for spinout."
        ),
        "assets": [
            {
                "number": 20,
                "title": "Sales Pack (Trust Pack)",
                "purpose": "Repeatable selling kit for scaling beyond design partners.",
            },
            {
                "number": 21,
                "title": "Pricing + Unit Economics",
                "purpose": "Compute-aware pricing model.",
            },
            {
                "number": 22,
                "title": "Roadmap (6/12/18 months) + Gates",
                "purpose": "AI-native roadmap with clear gates.",
            },
            {
                "number": 23,
                "title": "Operating Model Blueprint",
                "purpose": "How the venture operates day-to-day at scale.",
            },
            {
                "number": 24,
                "title": "Investor Pack + Data Room",
                "purpose": "Everything investors need for due diligence.",
            },
            {
                "number": 25,
                "title": "Capital Plan + Runway",
                "purpose": "Detailed financial plan tied to milestones.",
            },
            {
                "number": 26,
                "title": "Spinout Legal Pack",
                "purpose": "Legal foundation for the standalone entity.",
            },
            {
                "number": 27,
                "title": "Exit Map",
                "purpose": "Acquirer logic + proof of defensibility.",
            },
        ],
    },
]

# Rough per-asset effort in working days. A complexity proxy, not derived from data.
ASSET_DURATION_DAYS: Dict[int, int] = {
    1: 3, 2: 2, 3: 5, 4: 4, 5: 3, 6: 3, 7: 4, 8: 5, 9: 4, 10: 6,
    11: 4, 12: 5, 13: 4, 14: 4, 15: 5, 16: 4, 17: 5, 18: 7, 19: 6, 20: 4,
    21: 5, 22: 5, 23: 4, 24: 6, 25: 5, 26: 7, 27: 4,
}
