"""
konducta framework - application infrastructure shared by the bot and companies.

Currently this is the structured logging layer:
``from konducta.framework.logging import RunLog, configure_logging``.
"""
