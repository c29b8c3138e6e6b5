from pydantic import BaseModel, ConfigDict

YES_NO = ("yes", "no")


class ConsentFormIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parentBooking: str = ""

    # Kid details
    kidFullName: str = ""
    dob: str = ""
    gender: str = ""
    address: str = ""
    language: str = ""
    # Parent / guardian
    parent1Name: str = ""
    parent1Relation: str = ""
    parent1Phone: str = ""
    parent1Email: str = ""
    parent2Name: str = ""
    parent2Phone: str = ""
    # Emergency contact
    emergencyName: str = ""
    emergencyRelation: str = ""
    emergencyPhone1: str = ""
    emergencyPhone2: str = ""
    # Pick up & drop
    pickupList: str = ""
    pickupName1: str = ""
    pickupNumber1: str = ""
    pickupName2: str = ""
    pickupNumber2: str = ""
    # Medical questionnaire (yes/no)
    medQ1: str = ""
    medQ2: str = ""
    medQ3: str = ""
    medQ4: str = ""
    medQ5: str = ""
    medQ6: str = ""
    medQ7: str = ""
    medQ8: str = ""
    # Medical details
    healthInfo: str = ""
    medications: str = ""
    healthConcerns: str = ""
    # Declaration
    playerName: str = ""
    guardianName: str = ""
    playerSignature: str = ""
    guardianSignature: str = ""


class ConsentFormOut(BaseModel):
    id: str
    parentBooking: str
    kidFullName: str
    guardianName: str
    createdAt: str
