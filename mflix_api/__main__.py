import uvicorn
from mflix_api.core.config import settings

if __name__ == "__main__":
    uvicorn.run("mflix_api.main:app", host=settings.HOST, port=settings.PORT)
