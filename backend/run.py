"""Run script with proper environment loading"""
import sys
from pathlib import Path

# Make the svg_output package importable without installation
BACKEND_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR.parent / ".env", override=True)

if __name__ == "__main__":
    import uvicorn
    from svg_output.core.config import get_settings
    from svg_output.main import app

    settings = get_settings()

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )
