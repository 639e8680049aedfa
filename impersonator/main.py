from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pathlib import Path
import os

# Load .env early so provider clients see secrets; real env vars win
try:
    from dotenv import load_dotenv, dotenv_values  # type: ignore
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        vals = dotenv_values(str(env_file))
        for k, v in vals.items():
            if v is None:
                continue
            if not os.getenv(k):
                os.environ[k] = v
    else:
        load_dotenv()
except Exception as e:
    print("[WARN] failed to load .env:", e)

from . import config
from .lyrics_generation.router import router as lyrics_router


WEB_DIR = Path(__file__).parent / "web"

app = FastAPI(
    title="Impersonator API",
    description="Generate original lyrics in the style of an existing song",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    # Explicit dev origins plus anything from CORS_ORIGINS; any localhost port via regex
    allow_origins=config.cors_origins(),
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,
)

app.include_router(lyrics_router, prefix="/api")

try:
    api_routes = [getattr(r, "path", str(r)) for r in app.routes if getattr(r, "path", "").startswith("/api")]
    print("[lyrics-generation] registered routes:")
    for p in sorted(api_routes):
        print("   ", p)
except Exception as e:
    print("[WARN] failed to enumerate lyrics-generation routes:", e)


@app.get("/", include_in_schema=False)
def form_page():
    return FileResponse(WEB_DIR / "index.html", media_type="text/html")


@app.get("/health")
def health_check():
    return {"status": "healthy"}
