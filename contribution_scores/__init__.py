"""
Contribution Scores Backend Package.

FastAPI service layer that ranks wiki contributors by the breadth and depth of
their editing activity over a trailing time window.

Subpackages:
    - api: FastAPI route handlers returning ordered report rows as JSON
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Revision scanning, score combining and report orchestration
    - sql: Parameterized SQL queries against the wiki revision tables

The HTML table rendering, page registration and localization of the wiki
extension live with the consumer; this package hands over a plain ordered
list of per-author statistic records.
"""

__version__ = "1.0.0"
