import os
from dotenv import load_dotenv

load_dotenv()

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
MODEL_NAME = os.getenv("MODEL_NAME", "llama-3.3-70b-versatile")
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.4"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "60"))

# Dashboard only
API_URL = os.getenv("API_URL", "http://localhost:8000")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
