from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
from datetime import date
import json
import os

app = FastAPI(title="Mock Credit Report Provider", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/report_stub") if os.path.exists("/report_stub") else Path(__file__).resolve().parents[2] / "report_stub"


def _envelope(number: str) -> JSONResponse:
    file = DATA_DIR / f"report_{number}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="report not found")
    return JSONResponse(content={
        "status": "success",
        "message": "Informe pedido",
        "data": {"id": number, "fecha": date.today().isoformat(), "informe": json.loads(file.read_text())},
    })


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/api/informeApi/obtenerInforme")
def tax_id_report(apiKey: str = Form(...), cuit: str = Form(...), tipo: str = Form("normal")):
    return _envelope(cuit)


@app.post("/api/informeApi/obtenerInformeDni")
def dni_report(apiKey: str = Form(...), dni: str = Form(...), sexo: str = Form("M"), tipo: str = Form("normal")):
    return _envelope(dni)
