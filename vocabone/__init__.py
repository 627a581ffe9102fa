"""
vocabone - retention scheduling and answer validation for vocabulary study.

Subpackages:
- sm2: SM-2 retention algorithm and the SQLAlchemy retention store
- validation: tiered answer validator and per-language rule providers
- session_builders: study session selection and ordering
- analytics: module statistics, review forecast, dashboards
- review: validate, grade and reschedule one answer against a store
"""

__version__ = "1.0.0"

from loguru import logger

# Silent until the application calls logger.enable("vocabone")
logger.disable("vocabone")
