import uvicorn

from movies.main import HOST, PORT


def main():
    uvicorn.run("movies.main:create_app", factory=True, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
