# https://openf1.org
OPENF1_BASE_URL = "https://api.openf1.org/v1"

SESSIONS_API_PATH = "/sessions"
DRIVERS_API_PATH = "/drivers"
POSITION_API_PATH = "/position"
INTERVALS_API_PATH = "/intervals"
CAR_DATA_API_PATH = "/car_data"
WEATHER_API_PATH = "/weather"
RACE_CONTROL_API_PATH = "/race_control"
LAPS_API_PATH = "/laps"

LATEST_SESSION_KEY = "latest"
