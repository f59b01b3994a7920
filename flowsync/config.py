from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    api_url: str = "http://localhost:8000"
    request_timeout: float = 10.0
    # Tiempo que un estado terminal queda visible antes de limpiarse
    decay_delay_seconds: float = 1.0
    guard_stale_decay: bool = False

settings = Settings()  # reads from env
