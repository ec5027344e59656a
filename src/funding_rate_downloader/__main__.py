from funding_rate_downloader.cli import app

if __name__ == "__main__":
    app()
