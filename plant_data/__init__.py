"""
plant_data — country-wise plant care dataset.

Components:
  records  — pydantic schema for country records (optional fields defaulted)
  catalog  — dataset loading, country lookup and plant search
"""
