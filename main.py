# main.py
from jewelry_admin.config.settings import get_settings
from jewelry_admin.main import app

settings = get_settings()

if __name__ == "__main__":
    import uvicorn
    if settings.reload:
        uvicorn.run("jewelry_admin.main:app", host=settings.host, port=settings.port, reload=True)
    else:
        uvicorn.run(app, host=settings.host, port=settings.port)
