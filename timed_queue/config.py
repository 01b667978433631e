from dotenv import load_dotenv
import os

load_dotenv()

# Base & data directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.getenv("TIMED_QUEUE_DATA_DIR", os.path.join(BASE_DIR, "data"))

# Token storage
SPOTIFY_TOKEN_FILE = os.getenv(
    "TIMED_QUEUE_TOKEN_FILE", os.path.join(DATA_DIR, "spotify_token.json")
)

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8000/auth/callback"
)

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-library-read",
    "user-read-playback-state",
    "user-modify-playback-state",
    "playlist-read-private",
    "playlist-read-collaborative",
    "streaming",
]

# Pagination limits enforced by the Web API
PLAYLISTS_PAGE_SIZE = 50
PLAYLIST_TRACKS_PAGE_SIZE = 100

# Number of randomized attempts for timed queues
DEFAULT_TRIAL_COUNT = int(os.getenv("TIMED_QUEUE_TRIALS", "10"))

# Logging
LOG_LEVEL = os.getenv("TIMED_QUEUE_LOG_LEVEL", "INFO")

# HTTP server
SERVER_HOST = os.getenv("TIMED_QUEUE_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("TIMED_QUEUE_PORT", "8000"))
