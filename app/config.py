# app/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Loading .env file at the project root
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
load_dotenv(dotenv_path=dotenv_path)

class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    jwt_secret: str = "your-super-secret-key-change-this-in-production"
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60
    # Credentials guarding /docs and /openapi.json
    docs_username: str = "admin"
    docs_password: str = "admin"
    docs_host: str = "http://localhost:3000" # Server URL shown in the OpenAPI document
    data_dir: str = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data')

settings = Settings()
