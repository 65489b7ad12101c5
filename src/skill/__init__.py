"""Skill request handling.

The skill layer turns a validated `SkillRequest` into exactly one `SkillResponse`: interceptors
resolve the locale and log, the dispatcher picks the first matching handler, and any error is turned
into a spoken apology.
"""
