"""Prompt templates for AI generated flashcards and answer grading."""

FLASHCARD_GENERATION_PROMPT = """Generate a set of {count} flashcards on {topic} where the user is learning {target_language}.
The flashcard questions should be written in the language {question_language}.
Each flashcard object should have a question and an answer. Return the flashcards as a JSON array of objects with "question" and "answer" fields.
Example output: [{{"question": "homme", "answer": "man"}}, {{"question": "to be", "answer": "être"}}, {{"question": "cat", "answer": "chat"}}]
Return pure JSON without markdown or new lines.
The answers should be concise and answerable with one word or a short phrase with no extra parentheses or punctuation.
The topic must be educational. Nonsensical or non-educational topics must be answered with an empty array: []"""


ANSWER_JUDGE_PROMPT = """You are an answer judge.
Determine if the user's answer is correct compared to the correct answer.
Be generous: treat minor spelling mistakes and synonyms as correct. Ignore letter case. Be flexible with numbers.
Question: "{question}"
User's answer: "{user_answer}"
Correct answer: "{correct_answer}"
Respond with a JSON object with two keys: "isCorrect" (boolean) and "reasoning" (one short sentence).
Example: {{"isCorrect": true, "reasoning": "The user's answer is a synonym of the correct answer."}}
Example: {{"isCorrect": false, "reasoning": "The user's answer does not match the meaning of the correct answer."}}
Do not respond with anything other than the JSON object."""


CEFR_LEVEL_HINT = "\nPitch the flashcards at CEFR level {cefr_level}."

LEARNING_AREA_HINT = "\nFocus the flashcards on {learning_area}."
