"""
Stateless flow API routes

Each endpoint runs one flow and returns its validated output. Provider
failures are reported in the response body (success=false), not as HTTP
errors.
"""
from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from loguru import logger

from quizify.models.requests import (
    SummarizeRequest,
    GenerateQuizRequest,
    ExtractPdfRequest,
    ExtractUrlRequest,
    ScoreQuizRequest,
)
from quizify.models.responses import (
    SummarizeResponse,
    GenerateQuizResponse,
    ExtractTextResponse,
    ScoreResponse,
)
from quizify.flows import GenerateQuizQuestionsInput
from quizify.services.quiz_session import QuizFlows, score_answers, score_feedback, ERROR_PREFIX, PDF_MIME_TYPE
from quizify.utils.data_uri import to_data_uri
from quizify.utils.dependencies import get_quiz_flows, validate_upload_file, handle_service_errors

router = APIRouter(prefix="/flows", tags=["Flows"])


def _extraction_response(text: str) -> ExtractTextResponse:
    if not text or text.startswith(ERROR_PREFIX):
        return ExtractTextResponse(success=False, error=text or "No text could be extracted")
    return ExtractTextResponse(success=True, extracted_text=text)


@router.post("/summarize", response_model=SummarizeResponse)
@handle_service_errors
async def summarize(
    request: SummarizeRequest,
    flows: QuizFlows = Depends(get_quiz_flows)
):
    """
    Summarize content

    - **content**: Text to condense into a quiz-ready summary
    """
    logger.info(f"📝 Summarize request: {len(request.content)} characters")

    result = await flows.summarize.run({"content": request.content})
    if result.summary.startswith(ERROR_PREFIX) or not result.summary:
        return SummarizeResponse(success=False, error=result.summary or "The AI could not summarize the content.")
    return SummarizeResponse(success=True, summary=result.summary)


@router.post("/generate-quiz", response_model=GenerateQuizResponse)
@handle_service_errors
async def generate_quiz(
    request: GenerateQuizRequest,
    flows: QuizFlows = Depends(get_quiz_flows)
):
    """
    Generate quiz questions from a summary

    - **content**: Summary (or any content) to build questions from
    - **subject**: Optional subject focus
    - **difficulty**: easy / medium / hard
    - **num_questions**: Target number of questions (default 5)
    - **question_format**: mcq (4 options) or true_false
    """
    logger.info(f"❓ Quiz request: {request.num_questions or 'default'} x {request.question_format or 'mcq'}")

    result = await flows.generate_quiz.run(GenerateQuizQuestionsInput(**request.model_dump()))
    if not result.questions:
        return GenerateQuizResponse(
            success=False,
            error="No questions were generated. The summary might be too short, or the AI could not "
                  "fulfill the request with the current settings."
        )
    return GenerateQuizResponse(
        success=True,
        message=f"Generated {len(result.questions)} questions",
        questions=result.questions
    )


@router.post("/extract-pdf", response_model=ExtractTextResponse)
@handle_service_errors
async def extract_pdf(
    request: ExtractPdfRequest,
    flows: QuizFlows = Depends(get_quiz_flows)
):
    """
    Extract text from a PDF given as a base64 data URI
    """
    result = await flows.extract_pdf.run({"pdf_data_uri": request.pdf_data_uri})
    return _extraction_response(result.extracted_text)


@router.post("/extract-pdf/upload", response_model=ExtractTextResponse)
@handle_service_errors
async def extract_pdf_upload(
    file: UploadFile = Depends(validate_upload_file),
    flows: QuizFlows = Depends(get_quiz_flows)
):
    """
    Extract text from an uploaded PDF file
    """
    if file.content_type != PDF_MIME_TYPE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload a .pdf file."
        )
    logger.info(f"📄 PDF upload: {file.filename}")

    data = await file.read()
    result = await flows.extract_pdf.run({"pdf_data_uri": to_data_uri(data, PDF_MIME_TYPE)})
    return _extraction_response(result.extracted_text)


@router.post("/extract-url", response_model=ExtractTextResponse)
@handle_service_errors
async def extract_url(
    request: ExtractUrlRequest,
    flows: QuizFlows = Depends(get_quiz_flows)
):
    """
    Fetch a public URL and extract its main readable text
    """
    logger.info(f"🌐 URL extraction request: {request.url}")

    result = await flows.extract_url.run({"url": request.url})
    return _extraction_response(result.extracted_text)


@router.post("/score", response_model=ScoreResponse)
async def score(request: ScoreQuizRequest):
    """
    Score answers against questions

    The score is the number of questions whose selected option equals the
    correct answer string.
    """
    total = len(request.questions)
    points = score_answers(request.questions, request.answers)
    return ScoreResponse(
        success=True,
        message=f"You scored {points} out of {total}.",
        score=points,
        total=total,
        feedback=score_feedback(points, total) if total else None
    )
