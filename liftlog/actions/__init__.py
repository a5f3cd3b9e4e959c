from liftlog.actions.base import LoggingRevalidator, RequestContext, Revalidator
from liftlog.actions.exercises import create_exercise, list_exercises
from liftlog.actions.sets import add_set, delete_set, update_set
from liftlog.actions.workout_exercises import (
    add_exercise_to_workout,
    remove_workout_exercise,
    reorder_workout_exercise,
)
from liftlog.actions.workouts import (
    complete_workout,
    create_workout,
    create_workout_with_exercises,
    delete_workout,
    get_workout,
    list_workouts,
    list_workouts_for_day,
    reopen_workout,
    update_workout,
)
