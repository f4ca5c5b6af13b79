MATCH_SYSTEM_PROMPT = "You are a helpful HR assistant. Output strictly valid JSON."


MATCH_PROMPT = """
You are an expert HR recruiter. Analyze the following resume against the job description.

Job Title: {title}
Job Description: {description}
Requirements: {requirements}

Resume Content:
{resume}

Evaluation rules:
- Judge the candidate only on what the resume states. Do NOT infer missing experience.
- A high matchScore requires several explicit matches to the requirements.
- If the requirements are not specified, judge against the job description alone.

Return ONLY a strict JSON object with exactly these keys:
- matchScore: integer from 0 to 100
- summary: a brief summary of the fit (2-3 sentences)
- strengths: array of strings listing key matching skills/strengths
- weaknesses: array of strings listing gaps or weaknesses
- missingQualifications: array of strings listing specific missing requirements
"""
