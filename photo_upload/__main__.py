import uvicorn

from photo_upload.config import HOST, PORT
from photo_upload.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
