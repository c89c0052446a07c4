"""
Agents used by the Easly assistant runtime.

For now there is a single FulfillmentAgent that:

- receives an intent-classified webhook body
- resolves it to a reply
- records the exchange and publishes an activity event
"""
