from fastapi import FastAPI
from places_proxy.routes.places_route import router as places_router
from places_proxy.routes.samples_route import router as samples_router

app = FastAPI(title="Real Estate Places Proxy")
app.include_router(places_router)
app.include_router(samples_router)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to the Real Estate Places Proxy",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "places": "/placesProxy?lat=<lat>&lng=<lng>&radius=<meters>&type=<type>",
            "samples": "/samples",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Places Proxy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("places_proxy.main:app", host="0.0.0.0", port=8000, reload=True)
