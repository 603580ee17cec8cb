"""watchdeck: monitoring frontend services for action conditions and dashboards."""

__version__ = "0.4.0"
