import pytest

from conftest import FakeMailer, InMemoryQuestionStore, counter_clock
from faqboard.core.exceptions import NotFoundError, StorageError, ValidationError
from faqboard.services.notification_service import Notifier
from faqboard.services.question_service import QuestionService


def _service(store=None, mailer=None, admin_email="admin@example.com"):
    store = store if store is not None else InMemoryQuestionStore()
    mailer = mailer if mailer is not None else FakeMailer()
    notifier = Notifier(
        mailer,
        admin_email=admin_email,
        admin_url="https://faq.example.com/admin.html",
        board_url="https://faq.example.com/",
    )
    return QuestionService(store, notifier, clock=counter_clock()), store, mailer


@pytest.mark.parametrize("blank", [None, "", "   ", "\n\t "])
def test_submit_blank_question_is_rejected_and_nothing_is_stored(blank):
    service, store, mailer = _service()

    with pytest.raises(ValidationError) as exc:
        service.submit(blank)

    assert exc.value.message == "La question est requise"
    assert store.docs == {}
    assert mailer.sent == []


def test_submit_creates_pending_record_with_defaults():
    service, store, _ = _service()

    question_id = service.submit("  How do I register?  ")

    q = store.get(question_id)
    assert q["question"] == "How do I register?"
    assert q["status"] == "pending"
    assert q["answer"] is None
    assert q["answeredAt"] is None
    assert q["name"] == "Anonymous"
    assert q["email"] is None
    assert q["createdAt"]


def test_submit_gives_each_question_a_fresh_id():
    service, _, _ = _service()

    assert service.submit("first") != service.submit("second")


def test_submit_trims_name_and_email():
    service, store, _ = _service()

    question_id = service.submit("Q?", email="  me@example.com ", name="  Alice ")

    q = store.get(question_id)
    assert q["name"] == "Alice"
    assert q["email"] == "me@example.com"


def test_submit_notifies_admin():
    service, _, mailer = _service()

    question_id = service.submit("Where is the guide?", email="bob@example.com", name="Bob")

    assert len(mailer.sent) == 1
    sent = mailer.sent[0]
    assert sent["to"] == "admin@example.com"
    assert "Where is the guide?" in sent["html"]
    assert "bob@example.com" in sent["html"]
    assert "https://faq.example.com/admin.html" in sent["html"]
    assert question_id


def test_submit_succeeds_when_notification_fails():
    service, store, _ = _service(mailer=FakeMailer(fail=True))

    question_id = service.submit("Still saved?")

    assert store.get(question_id)["status"] == "pending"


def test_submit_without_admin_email_sends_nothing():
    service, _, mailer = _service(admin_email=None)

    service.submit("Anyone there?")

    assert mailer.sent == []


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_answer_blank_is_rejected_and_record_unchanged(blank):
    service, store, _ = _service()
    question_id = service.submit("Q?")
    before = store.get(question_id)

    with pytest.raises(ValidationError) as exc:
        service.answer(question_id, blank)

    assert exc.value.message == "La réponse est requise"
    assert store.get(question_id) == before


def test_answer_unknown_id_raises_not_found():
    service, _, _ = _service()

    with pytest.raises(NotFoundError):
        service.answer("does-not-exist", "See the guide.")


def test_answer_sets_answered_state():
    service, store, _ = _service()
    question_id = service.submit("How do I register?")
    created_at = store.get(question_id)["createdAt"]

    service.answer(question_id, "  See the guide. ")

    q = store.get(question_id)
    assert q["status"] == "answered"
    assert q["answer"] == "See the guide."
    assert q["answeredAt"] is not None
    assert q["createdAt"] == created_at


def test_answer_twice_overwrites_answer_and_keeps_status():
    service, store, _ = _service()
    question_id = service.submit("Q?")
    service.answer(question_id, "first")
    first_at = store.get(question_id)["answeredAt"]

    service.answer(question_id, "second")

    q = store.get(question_id)
    assert q["status"] == "answered"
    assert q["answer"] == "second"
    assert q["answeredAt"] > first_at


def test_answer_notifies_submitter_with_email():
    service, _, mailer = _service()
    question_id = service.submit("Q with email?", email="asker@example.com")
    mailer.sent.clear()

    service.answer(question_id, "Yes.")

    assert [m["to"] for m in mailer.sent] == ["asker@example.com"]
    assert "Q with email?" in mailer.sent[0]["html"]
    assert "Yes." in mailer.sent[0]["html"]


def test_answer_without_submitter_email_sends_nothing():
    service, _, mailer = _service()
    question_id = service.submit("Anonymous Q")
    mailer.sent.clear()

    service.answer(question_id, "Answer")

    assert mailer.sent == []


def test_answer_is_kept_when_submitter_notification_fails():
    store = InMemoryQuestionStore()
    service, _, _ = _service(store=store, mailer=FakeMailer(fail=True))
    question_id = service.submit("Q?", email="asker@example.com")

    service.answer(question_id, "Kept")

    assert store.get(question_id)["answer"] == "Kept"


def test_remove_is_idempotent():
    service, store, _ = _service()
    question_id = service.submit("Q?")

    service.remove(question_id)
    service.remove(question_id)

    assert store.get(question_id) is None


def test_public_list_only_answered_newest_answer_first():
    service, _, _ = _service()
    a = service.submit("a")
    b = service.submit("b")
    service.submit("pending")
    service.answer(b, "answer b")
    service.answer(a, "answer a")

    assert [q["id"] for q in service.public_list()] == [a, b]


def test_full_list_includes_everything_newest_created_first():
    service, _, _ = _service()
    first = service.submit("first")
    second = service.submit("second")
    service.answer(first, "done")

    assert [q["id"] for q in service.full_list()] == [second, first]


def test_get_unknown_raises_not_found():
    service, _, _ = _service()

    with pytest.raises(NotFoundError):
        service.get("nope")


class _RereadFailsStore(InMemoryQuestionStore):
    """`get` falla en cuanto la pregunta ya fue respondida."""

    def get(self, question_id):
        doc = self.docs.get(question_id)
        if doc and doc.get("status") == "answered":
            raise StorageError("get question falló: timeout")
        return super().get(question_id)


def test_answer_is_reported_saved_when_reread_fails():
    store = _RereadFailsStore()
    service, _, mailer = _service(store=store)
    question_id = service.submit("Q?", email="asker@example.com")
    mailer.sent.clear()

    updated = service.answer(question_id, "Saved anyway")

    assert updated["id"] == question_id
    assert updated["status"] == "answered"
    assert updated["answer"] == "Saved anyway"
    assert store.docs[question_id]["answer"] == "Saved anyway"
    assert mailer.sent == []
