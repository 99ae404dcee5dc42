from playwright.async_api import Page

from answer_memory import AnswerMemory
from config import AppConfig
from .answer_binary_questions import answer_binary_questions
from .answer_dropdown_questions import answer_dropdown_questions
from .answer_text_questions import answer_text_questions
from .fill_contact_info import fill_contact_info, upload_resume


async def fill_fields(page: Page, app_config: AppConfig, memory: AnswerMemory) -> None:
    """
    Orchestrates filling of all field types on the current step of the Easy Apply form.
    """
    await fill_contact_info(page, app_config.form_data.email, app_config.form_data.phone)
    await upload_resume(page, app_config.form_data.cv_path)

    await answer_text_questions(page, memory)
    await answer_binary_questions(page, memory)
    await answer_dropdown_questions(page, memory)
