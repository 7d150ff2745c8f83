# docqa/main.py
import asyncio
import logging
from pathlib import Path
from typing import Optional

import openai
from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from .answer import AnswerRequester
from .chunking import chunks_for
from .config import HOST, PORT, Settings, configure_logging
from .extract import is_supported
from .store import DocumentStore

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    requester: Optional[AnswerRequester] = None,
) -> FastAPI:
    """
    Build the web app around a document store and an answer requester.

    Anything not passed in is built from ``settings``, which default to the
    process environment.
    """
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = DocumentStore(settings.documents_dir)
    if requester is None:
        requester = AnswerRequester(
            openai.OpenAI(api_key=settings.openai_api_key),
            model=settings.llm_model,
            markdown=settings.answer_in_markdown,
        )

    app = FastAPI(title="Document QA")
    app.state.settings = settings
    app.state.store = store
    app.state.requester = requester

    async def render(request: Request, **context):
        context.setdefault("documents", await run_in_threadpool(store.list_documents))
        return templates.TemplateResponse(request, "index.html", context)

    # ------------------ Health ------------------
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # ------------------ List Documents ------------------
    @app.get("/")
    @app.get("/app")
    async def index(request: Request):
        return await render(request)

    @app.get("/documents")
    async def list_documents():
        return await run_in_threadpool(store.list_documents)

    # ------------------ Upload File ------------------
    @app.post("/upload")
    async def upload_file(file: UploadFile = File(...)):
        data = await file.read()
        await run_in_threadpool(store.save, file.filename, data)
        return RedirectResponse(url="/", status_code=303)

    # ------------------ Ask ------------------
    @app.post("/ask")
    async def ask(
        request: Request,
        document_name: str = Form(..., alias="documentName"),
        question: str = Form(...),
    ):
        """
        Answer a question about one stored document:
        1. Extract the document text
        2. Split it into fixed-size chunks
        3. Ask the LLM chunk by chunk until one answers
        """
        path = store.path_for(document_name)
        if is_supported(path) and not await run_in_threadpool(store.exists, document_name):
            raise HTTPException(status_code=404, detail="Document not found")

        chunks = await run_in_threadpool(chunks_for, path)
        logger.info("Asking about %s across %d chunks", path.name, len(chunks))

        try:
            answer = await run_in_threadpool(requester.ask, chunks, question)
        except openai.AuthenticationError:
            raise HTTPException(
                status_code=401,
                detail="Invalid OpenAI API key. Please check your OPENAI_API_KEY environment variable."
            )
        except openai.RateLimitError:
            raise HTTPException(
                status_code=502,
                detail="OpenAI API quota exceeded while generating the answer."
            )
        except openai.APIError as e:
            raise HTTPException(
                status_code=502,
                detail=f"OpenAI API error while generating answer: {str(e)}"
            )

        # Cosmetic pause so the page shows a loading state.
        if settings.response_delay_ms > 0:
            await asyncio.sleep(settings.response_delay_ms / 1000)

        return await render(request, answer=answer, question=question, document_name=path.name)

    return app


def run():
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    import uvicorn

    logger.info("Server is running on port %d", PORT)
    uvicorn.run(create_app(settings), host=HOST, port=PORT)
