# 🧩 travel_pricing/shared/__init__.py
"""🧩 Спільний шар: утиліти без доменної логіки."""
