# doglog/services/prompts.py
"""
LLM 요청 메시지 구성

- 시스템 프롬프트: 행동 전문가 페르소나와 응답 JSON 형식 지시 (고정 문자열)
- 사용자 프롬프트: 반려견 프로필과 로컬 분석 결과를 요약한 자연어 텍스트
"""
from datetime import date
from typing import List, Optional

from doglog.analytics.time_range import TimeRange, filter_by_time_range
from doglog.models.activity import Activity
from doglog.models.daily_rating import DailyRating
from doglog.models.dog import Dog
from doglog.models.insights import DogInsights, TrendDirection
from doglog.models.llm_analysis import LLMAnalysis
from doglog.utils.datetime_utils import DateTimeUtils

ANALYSIS_SYSTEM_PROMPT = """You are Dr. Sarah Chen, a world-renowned dog behaviorist with 25+ years of experience specializing in breed-specific behavior, age-appropriate training, and behavioral modification. You've worked with thousands of dogs across all breeds and ages, published research on canine psychology, and are known for your practical, science-based training approaches.

ANALYSIS APPROACH:
- Consider breed-specific traits, instincts, and common behavioral patterns
- Factor in age-appropriate expectations and developmental stages
- Analyze activity patterns for breed suitability and adequacy
- Identify training opportunities based on breed characteristics
- Provide specific, actionable training techniques with examples
- Consider the dog's individual personality alongside breed tendencies

TRAINING PHILOSOPHY:
- Positive reinforcement-based methods
- Breed-specific exercise and mental stimulation needs
- Age-appropriate training complexity
- Consistency and routine importance
- Early intervention for behavioral concerns

Provide your response in exactly this JSON format:
{
    "summary": "Professional assessment as Dr. Chen would provide",
    "breedAnalysis": {
        "breedTraits": ["trait1", "trait2", "trait3"],
        "exerciseNeeds": "Description of breed-specific exercise requirements",
        "mentalStimulationNeeds": "Description of breed-specific mental stimulation needs",
        "commonIssues": ["issue1", "issue2"]
    },
    "ageConsiderations": {
        "developmentalStage": "puppy|adolescent|adult|senior",
        "ageAppropriateExpectations": "What's normal for this age",
        "trainingReadiness": "Age-specific training capabilities"
    },
    "behaviorAssessment": {
        "strengths": ["strength1", "strength2"],
        "concerns": ["concern1", "concern2"],
        "overallScore": 85,
        "progressTrend": "improving|stable|declining"
    },
    "trainingRecommendations": [
        {
            "issue": "Specific behavioral issue or improvement area",
            "technique": "Exact training technique name",
            "steps": ["step1", "step2", "step3"],
            "duration": "Expected training timeline",
            "frequency": "How often to practice",
            "priority": "high|medium|low"
        }
    ],
    "keyInsights": ["insight1", "insight2", "insight3"],
    "healthIndicators": {
        "exerciseLevel": "excellent|good|fair|poor",
        "mentalStimulation": "excellent|good|fair|poor",
        "routineConsistency": "excellent|good|fair|poor"
    }
}"""

TRAINING_PLAN_SYSTEM_PROMPT = """You are Dr. Sarah Chen creating a specific 7-day training plan for this dog. Based on your previous analysis, create a detailed weekly schedule that addresses the training recommendations you provided.

Create a realistic, actionable weekly training plan that:
- Addresses the specific training recommendations from your analysis
- Considers the dog's breed, age, and current behavioral patterns
- Includes daily activities with specific timing
- Balances training, exercise, and rest
- Shows progression throughout the week
- Includes backup plans for busy days

Provide your response in exactly this JSON format:
{
    "weekTitle": "Perfect Training Week for [Dog Name]",
    "weekGoal": "Primary goal for this week",
    "days": [
        {
            "dayName": "Monday",
            "theme": "Day theme (e.g., 'Foundation Building')",
            "activities": [
                {
                    "time": "7:00 AM",
                    "activity": "Morning Walk",
                    "duration": "20 minutes",
                    "focus": "Physical exercise",
                    "instructions": "Detailed step-by-step instructions",
                    "trainingGoal": "What specific behavior/skill to work on"
                }
            ],
            "dailyGoal": "What to achieve today",
            "successMetrics": ["How to measure success", "Backup plan if struggling"]
        }
    ],
    "weeklyTips": ["Tip 1", "Tip 2", "Tip 3"],
    "troubleshooting": {
        "commonIssues": ["Issue 1", "Issue 2"],
        "solutions": ["Solution 1", "Solution 2"]
    }
}"""

RECENT_ACTIVITY_NOTES = 3
RECENT_RATING_NOTES = 5


def describe_age(birthdate: Optional[date], today: Optional[date] = None) -> str:
    """생년월일로부터 연령대(Puppy / Young Adult / Adult / Senior)가 포함된 나이 설명을 만듭니다."""
    if birthdate is None:
        return "Age unknown"

    years, months = DateTimeUtils.age_components(birthdate, on=today)
    if years == 0:
        return f"{months} months old (Puppy)"
    if years < 2:
        return f"{years} year(s) {months} month(s) old (Young Adult)"
    if years < 7:
        return f"{years} years old (Adult)"
    return f"{years} years old (Senior)"


def _describe_direction(direction: TrendDirection) -> str:
    if direction == TrendDirection.UP:
        return "Improving"
    if direction == TrendDirection.DOWN:
        return "Declining"
    return "Stable"


def _non_empty_notes(records) -> List[str]:
    return [r.notes for r in records if r.notes]


def build_data_summary(dog: Dog,
                       time_range: TimeRange,
                       insights: DogInsights,
                       activities: List[Activity],
                       daily_ratings: List[DailyRating],
                       today: Optional[date] = None) -> str:
    """
    분석 요청의 사용자 메시지를 구성합니다.
    활동 패턴별 최근 메모(최대 3개)와 하루 평가 메모(최대 5개)를 함께 전달합니다.
    """
    dog_name = dog.name or "Dog"
    breed = dog.breed or "Unknown breed"
    gender = dog.gender.value if dog.gender else "Unknown"

    activities = filter_by_time_range(activities, time_range)
    daily_ratings = filter_by_time_range(daily_ratings, time_range)

    activity_lines = []
    for pattern in insights.activity_patterns:
        notes = _non_empty_notes(a for a in activities if a.activity_type == pattern.activity_type)
        notes_text = f" | Recent notes: {'; '.join(notes[-RECENT_ACTIVITY_NOTES:])}" if notes else ""
        activity_lines.append(
            f"{pattern.activity_type}: {pattern.frequency}x/week, "
            f"{int(pattern.success_rate * 100)}% success rate{notes_text}"
        )
    activity_details = "\n".join(activity_lines) or "No activities logged"

    rating_notes = _non_empty_notes(daily_ratings)[-RECENT_RATING_NOTES:]
    observations = "\n".join(f"• {note}" for note in rating_notes) or "No recent notes recorded"

    mood = insights.overall_mood
    weekly = insights.weekly_trends
    local_insights = "\n".join(f"• {insight.description}" for insight in insights.behavior_insights)

    return f"""🐕 DOG PROFILE:
Name: {dog_name}
Breed: {breed} (Please analyze breed-specific traits and needs)
Age: {describe_age(dog.birthdate, today)} (Please consider age-appropriate expectations)
Gender: {gender}
Analysis Period: {time_range.display_name}

📊 ACTIVITY PATTERNS:
{activity_details}

😊 MOOD & BEHAVIOR TRENDS:
Current mood: {mood.current}
Trend: {_describe_direction(mood.direction)}
Improvement: {int(mood.improvement)}%
Consistency: {int(mood.consistency * 100)}%

📝 RECENT OWNER OBSERVATIONS:
{observations}

📅 WEEKLY PATTERNS:
Best days: {', '.join(weekly.best_days)}
Average activities per day: {weekly.average_activities_per_day:.1f}

🔍 LOCAL AI INSIGHTS:
{local_insights}

📈 DATA CONFIDENCE: {int(insights.confidence * 100)}%

EXPERT ANALYSIS REQUEST:
Dr. Chen, please provide your professional behaviorist analysis for {dog_name}, a {breed}. Focus on:
1. Breed-specific behavioral assessment and training needs
2. Age-appropriate expectations and development stage
3. Specific training techniques for any identified issues
4. Detailed step-by-step training protocols
5. Exercise and mental stimulation recommendations

Please be as specific and actionable as possible with your recommendations."""


def build_training_plan_prompt(dog: Dog, analysis: LLMAnalysis) -> str:
    """이전 분석 결과의 훈련 권장 사항을 바탕으로 7일 계획 요청 메시지를 구성합니다."""
    dog_name = dog.name or "Dog"
    breed = dog.breed or "Unknown breed"

    training_focus = "\n".join(
        f"• {rec.issue}: Use {rec.technique} - {', '.join(rec.steps)}"
        for rec in analysis.training_recommendations
    ) or "General training and enrichment"

    breed_analysis = analysis.breed_analysis
    age = analysis.age_considerations
    behavior = analysis.behavior_assessment

    return f"""Create a perfect training week for {dog_name}, a {breed}.

TRAINING PRIORITIES FROM ANALYSIS:
{training_focus}

BREED CONSIDERATIONS:
Exercise needs: {breed_analysis.exercise_needs}
Mental stimulation: {breed_analysis.mental_stimulation_needs}
Common breed issues: {', '.join(breed_analysis.common_issues)}

AGE STAGE: {age.developmental_stage}
Training readiness: {age.training_readiness}

CURRENT BEHAVIOR SCORE: {behavior.overall_score}/100
Progress trend: {behavior.progress_trend}

Please create a detailed 7-day plan that addresses these specific needs and training goals. Make it practical for a busy dog owner while ensuring effective training progress."""
