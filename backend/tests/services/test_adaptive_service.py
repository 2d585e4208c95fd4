"""
Integration tests for the adaptive learning service
"""

import pytest

from athos.config import AdaptiveConfig
from athos.exceptions import UserNotFoundError
from athos.models import BehaviorEventCreate, ContentType, PathStatus, QuizSubmission
from athos.services import ProgressService, QuizService
from athos.services.adaptive import AdaptiveLearningService


class TestRecommendations:
    @pytest.mark.asyncio
    async def test_new_user_gets_remedial_and_next_content(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            user = await seed.user(learning_style="visual")
            text_basic = await seed.content(1, "text", "basic")
            video_adv = await seed.content(1, "video", "advanced")
            image_basic = await seed.content(1, "image", "basic")
            await seed.quiz(1)

            recommendations = await AdaptiveLearningService(session).get_recommendations(
                user.id
            )

            assert [c.id for c in recommendations.next_content] == [
                video_adv.id,
                image_basic.id,
                text_basic.id,
            ]
            # No quiz scores yet, so the module reads as needing basics
            assert {c.id for c in recommendations.remedial_content} == {
                text_basic.id,
                image_basic.id,
            }
            assert recommendations.advanced_content == []
            assert len(recommendations.suggested_quizzes) == 1
            assert set(recommendations.performance_insights) == {
                "module1",
                "module2",
                "module3",
            }
            assert [s.status for s in recommendations.learning_path] == [
                PathStatus.NOT_STARTED
            ] * 3

    @pytest.mark.asyncio
    async def test_high_scores_unlock_advanced_content(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            user = await seed.user()
            basic = await seed.content(2, "text", "basic")
            advanced = await seed.content(2, "video", "advanced")
            quiz = await seed.quiz(2)

            progress_service = ProgressService(session)
            await progress_service.record_content_activity(user.id, basic.id, completed=True)
            await progress_service.record_content_activity(user.id, advanced.id, completed=True)
            await progress_service.save_quiz_result(user.id, quiz.id, 95)

            service = AdaptiveLearningService(session, progress_service=progress_service)
            recommendations = await service.get_recommendations(user.id)

            assert [c.id for c in recommendations.advanced_content] == [advanced.id]
            insight = recommendations.performance_insights["module2"]
            assert insight.ready_for_advanced
            assert insight.completion_rate == 100
            assert recommendations.learning_path[1].status == PathStatus.ADVANCED_READY
            assert recommendations.next_content == []
            assert all(
                q.module_id != 2 for q in recommendations.suggested_quizzes
            )

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        async with db_session() as session:
            with pytest.raises(UserNotFoundError):
                await AdaptiveLearningService(session).get_recommendations("ghost")


class TestAdaptiveLists:
    @pytest.mark.asyncio
    async def test_adaptive_content_for_textual_learner(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            user = await seed.user(learning_style="textual")
            image = await seed.content(1, "image")
            text = await seed.content(1, "text")

            items = await AdaptiveLearningService(session).get_adaptive_content(user.id, 1)

            assert [i.id for i in items] == [text.id, image.id]
            assert items[0].adaptive_metadata.learning_style_match == 4

    @pytest.mark.asyncio
    async def test_adaptive_quizzes_flag_retake(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            user = await seed.user()
            quiz = await seed.quiz(3, correct=(0, 0, 0))
            untouched = await seed.quiz(3)
            await QuizService(session).submit_quiz(
                user.id,
                quiz.id,
                QuizSubmission(
                    answers=[
                        {"question_id": q.id, "selected_option": 1}
                        for q in quiz.questions
                    ]
                ),
            )

            items = await AdaptiveLearningService(session).get_adaptive_quizzes(user.id, 3)

            by_id = {q.id: q.adaptive_metadata for q in items}
            assert by_id[quiz.id].should_retake
            assert by_id[quiz.id].last_score == 0
            assert by_id[untouched.id].reason == "not attempted"


class TestTrackBehavior:
    @pytest.mark.asyncio
    async def test_every_fifth_event_refreshes_preferences(self, db_session, seeder):
        async with db_session() as session:
            user = await seeder(session).user()
            service = AdaptiveLearningService(session)

            responses = []
            for _ in range(5):
                responses.append(
                    await service.track_behavior(
                        user.id,
                        BehaviorEventCreate(
                            action_type="view",
                            time_spent=50,
                            interactions=3,
                            metadata={"contentType": "video"},
                        ),
                    )
                )

            assert [r.event_count for r in responses] == [1, 2, 3, 4, 5]
            assert [r.preferences_refreshed for r in responses] == [False] * 4 + [True]

            progress = await ProgressService(session).get_or_create_progress(user.id)
            assert progress.behavior_event_count == 5
            assert progress.derived_preferences.preferred_content_type == ContentType.VIDEO

    @pytest.mark.asyncio
    async def test_completion_event_updates_content_progress(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            user = await seed.user()
            item = await seed.content(1, "image")

            service = AdaptiveLearningService(session)
            await service.track_behavior(
                user.id,
                BehaviorEventCreate(content_id=item.id, action_type="view", time_spent=20),
            )
            await service.track_behavior(
                user.id,
                BehaviorEventCreate(
                    content_id=item.id, action_type="complete", time_spent=10, completed=True
                ),
            )

            progress = await ProgressService(session).get_or_create_progress(user.id)
            record = progress.content_progress_for(item.id)
            assert record.completed
            assert record.time_spent == 30
            assert progress.module_progress[0].progress == 70

    @pytest.mark.asyncio
    async def test_event_without_content_leaves_progress(self, db_session, seeder):
        async with db_session() as session:
            user = await seeder(session).user()
            await AdaptiveLearningService(session).track_behavior(
                user.id, BehaviorEventCreate(action_type="navigation")
            )

            progress = await ProgressService(session).get_or_create_progress(user.id)
            assert progress.content_progress == []
            assert progress.behavior_event_count == 1

    @pytest.mark.asyncio
    async def test_event_for_unknown_content_is_tracked_without_progress(
        self, db_session, seeder
    ):
        async with db_session() as session:
            user = await seeder(session).user()
            response = await AdaptiveLearningService(session).track_behavior(
                user.id,
                BehaviorEventCreate(
                    content_id="missing", action_type="complete", completed=True
                ),
            )

            assert response.event_count == 1
            progress = await ProgressService(session).get_or_create_progress(user.id)
            assert progress.content_progress == []

    @pytest.mark.asyncio
    async def test_custom_analysis_interval(self, db_session, seeder):
        async with db_session() as session:
            user = await seeder(session).user()
            service = AdaptiveLearningService(session, AdaptiveConfig(analysis_interval=2))

            first = await service.track_behavior(user.id, BehaviorEventCreate())
            second = await service.track_behavior(user.id, BehaviorEventCreate())

            assert not first.preferences_refreshed
            assert second.preferences_refreshed
