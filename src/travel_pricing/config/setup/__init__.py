# ⚙️ travel_pricing/config/setup/__init__.py
"""⚙️ Збирання залежностей рушія (DI-контейнер)."""
