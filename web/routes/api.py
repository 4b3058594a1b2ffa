"""Recognition JSON API endpoints."""

import logging

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from starlette.responses import JSONResponse, Response

from config import DEFAULT_LANGUAGE, GENERIC_ERROR_MESSAGE, UNREADABLE_FILE_MESSAGE
from errors import OcrAppError, UnreadableFileError
from image_loader import load_image
from preprocessing import preprocess_image_async
from recognition import SUPPORTED_LANGUAGES, RecognitionOptions
from web.runner import run_recognition
from web.schemas import LanguageOut, LanguagesResponse, RecognizeResponse

logger = logging.getLogger(__name__)

api_router = APIRouter()


@api_router.get('/health')
async def health():
    return {'status': 'ok'}


@api_router.get('/api/languages', response_model=LanguagesResponse)
async def list_languages() -> LanguagesResponse:
    """Languages offered by the selector, in display order."""
    return LanguagesResponse(
        languages=[LanguageOut(value=lang.code, label=lang.label) for lang in SUPPORTED_LANGUAGES],
        default=DEFAULT_LANGUAGE,
    )


@api_router.post('/api/recognize', response_model=RecognizeResponse)
async def recognize_upload(
    request: Request,
    file: UploadFile = File(...),
    language: str = Form(DEFAULT_LANGUAGE),
    binarize: bool = Form(False),
):
    """Extract text from an uploaded image.

    400 for unreadable uploads or unsupported languages, 500 for any
    preprocessing or engine failure.
    """
    try:
        options = RecognitionOptions.from_form(language, binarize)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    data = await file.read()
    _, result = await run_recognition(request.app, data, options, file.filename)

    if result.ok:
        return RecognizeResponse(text=result.text)

    status_code = 400 if result.unreadable else 500
    return JSONResponse(
        status_code=status_code,
        content=RecognizeResponse(error=result.error).model_dump(),
    )


@api_router.post('/api/preprocess')
async def preprocess_upload(
    file: UploadFile = File(...),
    binarize: bool = Form(False),
):
    """Return the PNG that would be handed to the OCR engine."""
    data = await file.read()
    try:
        source = await load_image(data, file.filename)
        processed = await preprocess_image_async(source, binarize)
    except UnreadableFileError as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=UNREADABLE_FILE_MESSAGE)
    except OcrAppError as e:
        logger.error("Preprocessing failed for %s: %s", file.filename, e, exc_info=True)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)

    return Response(content=processed.png, media_type='image/png')
