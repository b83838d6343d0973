from __future__ import annotations

# Phrases that mark an email as being about a trial.
TRIAL_KEYWORDS = (
    "free trial",
    "trial period",
    "trial expires",
    "trial ends",
    "trial ending",
    "trial subscription",
    "start your trial",
    "your trial",
    "trial version",
    "premium trial",
)

# Words that mark an email as being about money changing hands.
BILLING_KEYWORDS = (
    "subscription",
    "billing",
    "payment",
    "charge",
    "invoice",
    "receipt",
    "renewal",
    "auto-renewal",
    "recurring",
)

YEARLY_KEYWORDS = (
    "yearly",
    "annual",
    "per year",
)
