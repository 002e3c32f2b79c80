"""
Alert Actions app.

Fires actions in response to alerts. Each action type validates its own
config, secrets and params and returns a uniform ok/error result.

Built-in action types:
- .rundeck: trigger a Rundeck job, then annotate the PagerDuty incident
  matching the dedup key or post the execution link to Slack
"""
