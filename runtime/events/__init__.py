"""
In-process notifications for the Easly assistant runtime.

- EventBus: publish/subscribe with per-listener failure isolation
- sinks: logging sink and the dashboard's recent-events feed
"""
