import pytest

from quiz_api.core.exceptions import BadRequestError, NotFoundError
from quiz_api.models import AnswerOption, Attempt, Question, Quiz


def _options(*flags):
    return [{"option_text": f"Option {i}", "is_correct": flag} for i, flag in enumerate(flags)]


class TestCreateQuestion:
    def test_exactly_one_correct_option_is_accepted(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Prophets")

        question = quiz_service.create_question(
            admin_auth, quiz.id, "Who was swallowed by a great fish?", _options(False, True, False), order_index=2
        )

        assert question.quiz_id == quiz.id
        assert question.order_index == 2
        assert [o.option_text for o in question.answer_options] == ["Option 0", "Option 1", "Option 2"]
        assert [o.order_index for o in question.answer_options] == [0, 1, 2]
        assert [o.is_correct for o in question.answer_options] == [False, True, False]

    @pytest.mark.parametrize("flags", [(False, False), (True, True), (True, True, False), (False, False, False)])
    def test_other_correct_counts_are_rejected(self, quiz_service, admin_auth, test_db, flags):
        quiz = quiz_service.create_quiz(admin_auth, "Prophets")

        with pytest.raises(BadRequestError) as exc_info:
            quiz_service.create_question(admin_auth, quiz.id, "Pick one", _options(*flags))

        assert exc_info.value.message == "Exactly one option must be marked as correct"
        assert test_db.query(Question).count() == 0
        assert test_db.query(AnswerOption).count() == 0

    def test_order_index_defaults_to_zero(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Prophets")

        question = quiz_service.create_question(admin_auth, quiz.id, "Pick one", _options(True, False))

        assert question.order_index == 0

    def test_missing_quiz_is_not_found(self, quiz_service, admin_auth):
        with pytest.raises(NotFoundError):
            quiz_service.create_question(admin_auth, 777, "Pick one", _options(True, False))

    def test_inactive_quiz_still_accepts_questions(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Drafts")
        quiz_service.update_quiz(admin_auth, quiz.id, is_active=False)

        question = quiz_service.create_question(admin_auth, quiz.id, "Pick one", _options(True, False))

        assert question.quiz_id == quiz.id


class TestBrowsing:
    def test_public_list_hides_inactive_quizzes(self, quiz_service, admin_auth):
        active = quiz_service.create_quiz(admin_auth, "Gospels")
        hidden = quiz_service.create_quiz(admin_auth, "Epistles")
        quiz_service.update_quiz(admin_auth, hidden.id, is_active=False)

        public_ids = [q.id for q in quiz_service.list_active()]
        admin_ids = [q.id for q in quiz_service.list_all(admin_auth)]

        assert public_ids == [active.id]
        assert set(admin_ids) == {active.id, hidden.id}

    def test_lists_are_newest_first(self, quiz_service, admin_auth):
        first = quiz_service.create_quiz(admin_auth, "First")
        second = quiz_service.create_quiz(admin_auth, "Second")

        assert [q.id for q in quiz_service.list_active()] == [second.id, first.id]

    def test_admin_list_counts_questions(self, quiz_service, admin_auth, make_quiz):
        quiz_id, _ = make_quiz([[("A", True), ("B", False)], [("C", False), ("D", True)]])

        listed = {q.id: q for q in quiz_service.list_all(admin_auth)}

        assert listed[quiz_id].question_count == 2

    def test_get_active_orders_questions(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Ordering")
        later = quiz_service.create_question(admin_auth, quiz.id, "Later", _options(True, False), order_index=5)
        sooner = quiz_service.create_question(admin_auth, quiz.id, "Sooner", _options(True, False), order_index=1)

        fetched = quiz_service.get_active(quiz.id)

        assert [q.id for q in fetched.questions] == [sooner.id, later.id]

    def test_get_active_rejects_inactive_quiz(self, quiz_service, admin_auth, make_quiz):
        quiz_id, _ = make_quiz([[("A", True), ("B", False)]], is_active=False)

        with pytest.raises(NotFoundError):
            quiz_service.get_active(quiz_id)

        assert quiz_service.get_any(admin_auth, quiz_id).id == quiz_id


class TestUpdate:
    def test_updates_only_provided_fields(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Psalms", "Songs")

        updated = quiz_service.update_quiz(admin_auth, quiz.id, description="Poetry")

        assert updated.title == "Psalms"
        assert updated.description == "Poetry"
        assert updated.is_active is True

    def test_empty_title_is_ignored(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Psalms")

        assert quiz_service.update_quiz(admin_auth, quiz.id, title="").title == "Psalms"

    def test_deactivate(self, quiz_service, admin_auth):
        quiz = quiz_service.create_quiz(admin_auth, "Psalms")

        assert quiz_service.update_quiz(admin_auth, quiz.id, is_active=False).is_active is False

    def test_missing_quiz_is_not_found(self, quiz_service, admin_auth):
        with pytest.raises(NotFoundError):
            quiz_service.update_quiz(admin_auth, 404, title="Nope")


class TestDelete:
    def test_cascades_to_questions_and_options_but_not_attempts(
        self, quiz_service, attempt_service, admin_auth, user_auth, make_quiz, test_db
    ):
        quiz_id, _ = make_quiz([[("A", True), ("B", False)], [("C", False), ("D", True)]])
        attempt_id = attempt_service.start(user_auth, quiz_id)["attempt_id"]

        response = quiz_service.delete_quiz(admin_auth, quiz_id)

        assert response == {"message": "Quiz deleted successfully"}
        test_db.expire_all()
        assert test_db.get(Quiz, quiz_id) is None
        assert test_db.query(Question).count() == 0
        assert test_db.query(AnswerOption).count() == 0
        # The attempt keeps its reference to the deleted quiz
        orphan = test_db.get(Attempt, attempt_id)
        assert orphan is not None
        assert orphan.quiz_id == quiz_id

    def test_missing_quiz_is_not_found(self, quiz_service, admin_auth):
        with pytest.raises(NotFoundError):
            quiz_service.delete_quiz(admin_auth, 31337)

    def test_delete_question_removes_its_options(self, quiz_service, admin_auth, make_quiz, test_db):
        quiz_id, questions = make_quiz([[("A", True), ("B", False)], [("C", False), ("D", True)]])

        quiz_service.delete_question(admin_auth, questions[0]["id"])

        assert [q.id for q in test_db.query(Question).all()] == [questions[1]["id"]]
        assert test_db.query(AnswerOption).count() == 2

    def test_delete_missing_question_is_not_found(self, quiz_service, admin_auth):
        with pytest.raises(NotFoundError) as exc_info:
            quiz_service.delete_question(admin_auth, 9)

        assert exc_info.value.message == "Question not found"
