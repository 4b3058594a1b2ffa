"""Upload form and result page."""

from fastapi import APIRouter, File, Form, Request, UploadFile

from config import DEFAULT_LANGUAGE, UPLOAD_SIZE_HINT
from image_loader import to_data_uri
from recognition import LANGUAGE_CODES, SUPPORTED_LANGUAGES, RecognitionOptions
from web.runner import run_recognition
from web.state import RecognitionState
from web.templates_env import TEMPLATES

ui_router = APIRouter()


def _page(
    request: Request,
    state: RecognitionState,
    language: str = DEFAULT_LANGUAGE,
    binarize: bool = False,
    image_uri: str | None = None,
    status_code: int = 200,
):
    return TEMPLATES.TemplateResponse(
        request,
        'index.html',
        {
            'state': state,
            'languages': SUPPORTED_LANGUAGES,
            'language': language,
            'binarize': binarize,
            'image_uri': image_uri,
            'size_hint': UPLOAD_SIZE_HINT,
        },
        status_code=status_code,
    )


@ui_router.get('/')
async def index(request: Request):
    """Empty form in the idle state."""
    return _page(request, RecognitionState())


@ui_router.post('/')
async def submit(
    request: Request,
    file: UploadFile | None = File(None),
    language: str = Form(DEFAULT_LANGUAGE),
    binarize: bool = Form(False),
):
    """Run recognition for the submitted form and render the outcome."""
    if language not in LANGUAGE_CODES:
        state = RecognitionState().begin().fail(f"Unsupported language: {language}")
        return _page(request, state, binarize=binarize, status_code=400)

    options = RecognitionOptions.from_form(language, binarize)
    data = await file.read() if file is not None else b""
    filename = file.filename if file is not None else None

    state, result = await run_recognition(request.app, data, options, filename)

    # Preview only uploads that decoded, typed from their content
    image_uri = to_data_uri(data, result.mime_type) if result.mime_type else None

    return _page(request, state, language=language, binarize=binarize, image_uri=image_uri)
