from dotenv import load_dotenv

from tocgen.shared.config import Settings

load_dotenv()


def get_settings() -> Settings:
    return Settings()
