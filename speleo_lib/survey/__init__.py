# -*- coding: utf-8 -*-
"""Survey, shot and station models."""

from speleo_lib.survey.models import Shot
from speleo_lib.survey.models import ShotRef
from speleo_lib.survey.models import Survey
from speleo_lib.survey.models import SurveyAlias
from speleo_lib.survey.models import SurveyInstrument
from speleo_lib.survey.models import SurveyMetadata
from speleo_lib.survey.models import SurveyStation
from speleo_lib.survey.models import SurveyTeam
from speleo_lib.survey.models import SurveyTeamMember

__all__ = [
    "Shot",
    "ShotRef",
    "Survey",
    "SurveyAlias",
    "SurveyInstrument",
    "SurveyMetadata",
    "SurveyStation",
    "SurveyTeam",
    "SurveyTeamMember",
]
