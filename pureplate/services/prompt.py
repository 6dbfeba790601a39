from __future__ import annotations

import os

DEFAULT_MARKET = os.getenv("ANALYZER_MARKET", "India")

PROMPT_TEMPLATE = """
Perform a deep dive analysis of the packaged food product: "{query}".
This product is specifically being checked for the {market} market.

Step 1: Search for the latest ingredient label of "{query}" in {market} (check FSSAI filings or recent supermarket listings).
Step 2: Identify the EXACT ingredients and their quantities (e.g., "Sugar: 35g per 100g", "Palm Oil: 15%").
Step 3: Evaluate each ingredient against modern nutritional science:
   - "Healthy": Natural, whole ingredients.
   - "Harmful": Excessive refined sugar, palm oil, MSG (E621), artificial colors (Sunset Yellow, etc.), high sodium, or trans fats.
   - "Neutral": Stabilizers, emulsifiers (if safe), or minor additives.
Step 4: DOUBLE CHECK the quantities. If the product has multiple variants, specify which one you found.

CRITICAL: Provide the response in this exact plain-text block structure:

PRODUCT: [Official Name in {market}]
SUMMARY: [2-3 sentence health impact summary]
HEALTH_SCORE: [A number from 1 to 100, where 100 is cleanest]
FSSAI_NOTICE: [Any specific FSSAI warning or "None"]

LIST_START
[Name] | [Quantity] | [Status: healthy/harmful/neutral] | [Concise Reason]
... (repeat for all major ingredients)
LIST_END
"""


def build_analysis_prompt(query: str, market: str = DEFAULT_MARKET) -> str:
    """
    Render the instruction block the report engine knows how to parse.
    """
    return PROMPT_TEMPLATE.format(query=query.strip(), market=market).strip()
