"""
Feedback module.

- Public form: anyone can submit name/email/phone/query (all required).
- Admin-only summary table of every submission.
"""
