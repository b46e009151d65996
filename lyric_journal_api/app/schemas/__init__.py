"""
Pydantic schema definitions for API payloads.

Request models accept the loosely-typed JSON the browser client sends
and leave the journal's own rules (required fields, truncation, tag
caps) to the services.  Response models use the camelCase keys of the
persisted document through field aliases.
"""
