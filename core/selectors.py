selectors = {
    # Login
    "login_indicator": "a.global-nav__primary-link--active, nav.global-nav",
    "email_input": 'input[name="session_key"]',
    "password_input": 'input[name="session_password"]',
    "login_submit": 'button[type="submit"]',

    # Job search results page
    "job_search_box": "input.jobs-search-box__text-input[aria-label*='Search by title']",
    "easy_apply_filter": "//button[@aria-label='Easy Apply filter.']",
    "job_card": '//div[contains(@class,"display-flex job-card-container")]',
    "already_applied": 'span.artdeco-inline-feedback__message:has-text("Applied")',

    # Job details page
    "easy_apply_button": "button.jobs-apply-button",

    # Easy apply modal
    "easy_apply_modal": ".jobs-easy-apply-modal",
    "contact_email_select": ".jobs-easy-apply-modal select[id*='multipleChoice'][id*='email' i]",
    "phone": ".jobs-easy-apply-modal input[id*='phoneNumber']",
    "resume_input": ".jobs-easy-apply-modal input[type='file']",
    "next_button": ".jobs-easy-apply-modal footer button[aria-label='Continue to next step']",
    "review_button": ".jobs-easy-apply-modal footer button[aria-label*='Review']",
    "submit": ".jobs-easy-apply-modal footer button[aria-label*='Submit']",

    # Free-text questions
    "text_question_label": "label.artdeco-text-input--label",
    "input_by_id": "[id='{id}']",  # Шаблон для input по id

    # Binary (radio) questions
    "radio_fieldset": 'fieldset[data-test-form-builder-radio-button-form-component="true"]',
    "radio_title": "span[data-test-form-builder-radio-button-form-component__title]",
    "radio_by_value": "input[value='{value}']",
    "radio_checked": "input[type='radio']:checked",

    # Dropdown questions
    "dropdown_container": "div[data-test-text-entity-list-form-component]",
    "dropdown_label": "label span:not(.visually-hidden)",
    "select": "select",
    "select_option": "option",

    # Post-submission
    "confirmation_dismiss": "button[aria-label='Dismiss']",
    "discard_button": "button[data-control-name='discard_application_confirm_btn']",
}
