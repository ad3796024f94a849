"""
Identity and content stores. Routers stay thin and call into these.
"""
