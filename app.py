from apexgrid.main import app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("apexgrid.main:app", host="0.0.0.0", port=5000, reload=True)
