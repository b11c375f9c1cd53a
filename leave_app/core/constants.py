"""
Service-wide constants
"""

SERVICE_NAME = "leave-management-backend"

# Employee codes look like K012345
EMPLOYEE_ID_PATTERN = r"^K[0-9]{6}$"

DEFAULT_CONTRACT_HOURS = 40

# Longest leave range accepted, start to end
MAX_LEAVE_SPAN_DAYS = 366
